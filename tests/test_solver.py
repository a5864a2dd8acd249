from wordgrid.grid import SHAPE_4X4, Grid, GridShape, parse_board
from wordgrid.solver import found_words, solve, spell, word_starts
from wordgrid.trie import TrieNode, load_trie

ALPHABET = "abcdefghijklmnop"

BOARD = "CATS REPO BONE DIGS"


def _make_trie(words: list[str]) -> TrieNode:
    root = TrieNode.new_root()
    for w in words:
        root.add_word(w)
    return root


def test_single_adjacent_word():
    grid = Grid.from_string(ALPHABET)
    paths = solve(_make_trie(["ae"]), grid)
    assert paths == [[SHAPE_4X4.from_xy(0, 0), SHAPE_4X4.from_xy(0, 1)]]


def test_diagonal_word():
    grid = Grid.from_string(ALPHABET)
    paths = solve(_make_trie(["af"]), grid)
    assert [[idx.flat for idx in p] for p in paths] == [[0, 5]]


def test_non_adjacent_word_not_found():
    """Letters exist on the grid but not next to each other."""
    grid = Grid.from_string(ALPHABET)
    assert solve(_make_trie(["ac", "ak", "ap"]), grid) == []


def test_no_revisit():
    """A word requiring revisiting a cell should not be found."""
    grid = Grid.from_string("abcd", GridShape(2, 2))
    paths = solve(_make_trie(["aba", "ab", "abc"]), grid)
    words = [spell(p, grid) for p in paths]
    assert "aba" not in words
    assert "ab" in words
    assert "abc" in words


def test_paths_in_search_order():
    grid = Grid.from_string("abcd", GridShape(2, 2))
    paths = solve(_make_trie(["ab", "abc", "ad"]), grid)
    assert [[idx.flat for idx in p] for p in paths] == [[0, 1], [0, 1, 2], [0, 3]]


def test_duplicate_spellings_are_kept():
    grid = Grid.from_string("aaaa", GridShape(2, 2))
    paths = solve(_make_trie(["aa"]), grid)
    # every ordered pair of distinct cells is adjacent in a 2x2 grid
    assert len(paths) == 12
    assert len({tuple(idx.flat for idx in p) for p in paths}) == 12


def test_no_repeated_index_in_any_path():
    grid = Grid.from_string("aaaaaa", GridShape(3, 2))
    paths = solve(_make_trie(["a" * n for n in range(1, 7)]), grid)
    assert paths
    for path in paths:
        assert len(set(path)) == len(path)
        for a, b in zip(path, path[1:]):
            assert b in list(a.get_neighbouring())
    # Some paths cover the whole grid
    assert max(len(p) for p in paths) == 6


def test_results_are_independent_copies():
    grid = Grid.from_string(ALPHABET)
    paths = solve(_make_trie(["ab", "abc"]), grid)
    assert len(paths) == 2
    paths[0].append(SHAPE_4X4.from_xy(3, 3))
    assert len(paths[1]) == 3


def test_solve_is_idempotent():
    grid = parse_board(BOARD)
    trie = _make_trie(["CAT", "CATS", "BONE", "BONES", "REP", "ONE", "SON"])
    assert solve(trie, grid) == solve(trie, grid)


def test_empty_trie_and_empty_word():
    grid = Grid.from_string(ALPHABET)
    assert solve(TrieNode.new_root(), grid) == []
    # The empty word has no path: searches start at root children
    assert solve(_make_trie([""]), grid) == []


def test_basic_solve():
    grid = parse_board(BOARD)
    words = ["CAT", "CATS", "CAR", "CARE", "BONE", "BONES", "REP", "PEN", "PONE",
             "DIG", "DIGS", "ONE", "ONES", "APE", "NOD", "NOG", "SON", "REPO",
             "OPEN", "NOPE", "PEON", "SING", "SIGN"]
    trie = _make_trie(words)
    result = found_words(solve(trie, grid), grid)
    assert "CAT" in result
    assert "BONE" in result
    assert "CATS" in result
    # CAR needs R at (0,1) after A at (1,0): adjacent diagonally
    assert "CAR" in result
    for w in result:
        assert w in words


def test_empty_results_for_no_matches():
    grid = Grid.from_string("ZZZZ", GridShape(2, 2))
    trie = _make_trie(["CAT", "DOG"])
    assert solve(trie, grid) == []
    assert found_words([], grid) == []


def test_found_words_deduplicates_and_sorts():
    grid = Grid.from_string("aaaa", GridShape(2, 2))
    paths = solve(_make_trie(["aa", "aaa"]), grid)
    assert found_words(paths, grid) == ["aaa", "aa"]
    assert found_words(paths, grid, min_length=3) == ["aaa"]


def test_found_words_max_results_cap():
    grid = parse_board(BOARD)
    trie = _make_trie(["CAT", "CATS", "BONE", "BONES", "REP", "ONE", "SON"])
    paths = solve(trie, grid)
    assert len(found_words(paths, grid, max_results=3)) == 3


def test_sort_order():
    grid = parse_board(BOARD)
    trie = _make_trie(["CAT", "CATS", "BONE", "BONES", "REP"])
    result = found_words(solve(trie, grid), grid)
    for i in range(len(result) - 1):
        assert len(result[i]) >= len(result[i + 1]) or (
            len(result[i]) == len(result[i + 1]) and result[i] <= result[i + 1]
        )


def test_word_starts_topmost_leftmost():
    grid = Grid.from_string("aaaa", GridShape(2, 2))
    paths = solve(_make_trie(["aa"]), grid)
    assert word_starts(paths, grid) == {"aa": (0, 0)}

    grid = parse_board(BOARD)
    paths = solve(_make_trie(["BONE", "ONE"]), grid)
    starts = word_starts(paths, grid)
    assert starts["BONE"] == (2, 0)
    # O at (3,1) also reaches N at (2,2) and sits on an earlier row than O at (1,2)
    assert starts["ONE"] == (1, 3)


def test_solve_with_loaded_dictionary(tmp_path):
    dict_file = tmp_path / "dict.txt"
    dict_file.write_text("tape\ntaps\npans\nzebra\nant\n", encoding="utf-8")
    trie = load_trie(str(dict_file), min_length=3)
    grid = parse_board("TAPE INSO EDRL KGHM")
    words = found_words(solve(trie, grid), grid)
    assert words == ["PANS", "TAPE", "TAPS", "ANT"]


def test_shared_empty_mask_is_not_marked(monkeypatch):
    masks = []
    original = Grid.empty_mask

    def tracking_empty_mask(shape=SHAPE_4X4):
        mask = original(shape)
        masks.append(mask)
        return mask

    monkeypatch.setattr(Grid, "empty_mask", staticmethod(tracking_empty_mask))
    grid = Grid.from_string("aaaa", GridShape(2, 2))
    assert len(solve(_make_trie(["aa"]), grid)) == 12
    assert len(masks) == 1
    assert not any(masks[0])
