from chess_extractor.core.move_text import calculate_move_count, clean_moves

RAW_MOVES = (
    "1. e4 {[%clk 0:09:58.7]} 1... e5 {[%clk 0:09:57.2]}  "
    "2. Nf3 { [%eval 0.25] [%clk 0:09:50] } 2... Nc6 {[%clk 0:09:49]}\n3. Bb5 1-0"
)


def test_clean_moves_strips_annotations_and_result():
    assert clean_moves(RAW_MOVES) == "1. e4 1... e5 2. Nf3 2... Nc6 3. Bb5"


def test_clean_moves_keeps_plain_comments():
    assert clean_moves("1. e4 {best by test} e5 1/2-1/2") == "1. e4 {best by test} e5"


def test_clean_moves_is_idempotent():
    once = clean_moves(RAW_MOVES)
    assert clean_moves(once) == once

    trailing_results = "1. d4 d5 0-1 0-1"
    assert clean_moves(clean_moves(trailing_results)) == clean_moves(trailing_results)


def test_clean_moves_empty():
    assert clean_moves("") == ""
    assert clean_moves("1-0") == ""


def test_calculate_move_count_counts_full_moves():
    assert calculate_move_count("1. e4 1... e5 2. Nf3 2... Nc6") == 2
    assert calculate_move_count("1. e4 e5 2. Nf3") == 1
    assert calculate_move_count("1. e4 e5 2. Nf3 Nc6 1-0") == 2


def test_calculate_move_count_empty():
    assert calculate_move_count("") == 0
