import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    GRID_WIDTH: int = 4
    GRID_HEIGHT: int = 4
    MAX_GRID_CELLS: int = 400

    MIN_WORD_LENGTH: int = 3
    MAX_RESULTS: int = 50

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "MIN_WORD_LENGTH": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "0", "false", "no"):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected a boolean, got {value!r}")
    if isinstance(value, bool):
        raise ValueError(f"expected {typ.__name__}, got a boolean")
    return typ(value)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to cfg. Returns field -> error for the ones rejected."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            if name in cfg.__dataclass_fields__:
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            coerced = _coerce(value, typ)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if typ is int and coerced < 0:
            errors[name] = "must be non-negative"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
