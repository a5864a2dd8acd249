import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordgrid.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordgrid")

# Populated at startup unless a trie is handed to create_app
_trie = None


def create_app(trie=None) -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _trie

        if trie is not None:
            _trie = trie
            logger.info("Using preloaded trie (%d nodes)", trie.node_count())
        else:
            from wordgrid.trie import load_trie
            logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
            # Shortest words are filtered per request so MIN_WORD_LENGTH stays editable
            _trie = load_trie(str(settings.DICTIONARY_PATH), min_length=1)
            logger.info("Trie loaded")

        yield

        _trie = None

    application = FastAPI(title="Word Grid Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {"status": "ok", "trie_loaded": _trie is not None}

    @application.post("/solve")
    async def solve(request: Request):
        from wordgrid.grid import GridShape, GridSizeError, parse_board
        from wordgrid.metrics import SolveStats
        from wordgrid.solver import found_words, solve as solve_board, spell, word_starts

        if _trie is None:
            raise HTTPException(503, "Dictionary not loaded")

        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict) or not isinstance(body.get("board"), str):
            raise HTTPException(400, "Expected a JSON object with a 'board' string")

        try:
            shape = GridShape(
                int(body.get("width", settings.GRID_WIDTH)),
                int(body.get("height", settings.GRID_HEIGHT)),
            )
        except (TypeError, ValueError) as e:
            raise HTTPException(400, f"Invalid grid size: {e}")
        if shape.size > settings.MAX_GRID_CELLS:
            raise HTTPException(400, f"Grid too large ({shape.size} cells, max {settings.MAX_GRID_CELLS})")

        stats = SolveStats(str(shape))

        with stats.stage("parse"):
            try:
                grid = parse_board(body["board"], shape)
            except GridSizeError as e:
                raise HTTPException(400, str(e))

        board = grid.rows()
        logger.info("Board %s: %s", shape, " / ".join("".join(row) for row in board))

        with stats.stage("search"):
            paths = solve_board(_trie, grid)
        stats.count("paths", len(paths))

        with stats.stage("collect"):
            all_words = found_words(paths, grid, settings.MIN_WORD_LENGTH)
            starts = word_starts(paths, grid)
            path_entries = [
                {"word": spell(path, grid), "cells": [list(idx.to_xy()) for idx in path]}
                for path in paths
                if len(path) >= settings.MIN_WORD_LENGTH
            ]
        stats.count("words", len(all_words))

        words = all_words[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else all_words
        stats.count("returned", len(words))
        stats.log_summary()

        if settings.DEBUG:
            logger.info("Stage timings: %s", stats.summary())

        return JSONResponse({
            "board": board,
            "words": words,
            "word_count": len(words),
            "path_count": len(path_entries),
            "paths": path_entries,
            "word_starts": {w: list(starts[w]) for w in all_words},
            "processing_time": stats.total_ms,
            "stage_timings": stats.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordgrid.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordgrid.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
