import pytest

from polishdiff.diffing import DiffEngine
from polishdiff.models import ChangePair, DiffOp, OpKind


@pytest.fixture
def diff_engine() -> DiffEngine:
    return DiffEngine()


def _side(ops, *kinds):
    return "".join(op.text for op in ops if op.kind in kinds)


@pytest.mark.parametrize(
    "original, polished",
    [
        ("This is a new method", "This is a novel methodology"),
        ("Hello World", "Hello World"),
        ("Hello", "World"),
        ("Hello", "Hello World"),
        ("Hello World", "Hello"),
        ("", "something new"),
        ("something old", ""),
        ("In this paper, we propose a new method to solve the problem.",
         "In this paper, we propose a novel methodology to address the issue."),
        ("这是一个测试文本 😀", "这是一段测试文字 😀"),
    ],
)
def test_generate_diff_reproduces_both_sides(diff_engine, original, polished):
    ops = diff_engine.generate_diff(original, polished)
    assert _side(ops, OpKind.EQUAL, OpKind.DELETE) == original
    assert _side(ops, OpKind.EQUAL, OpKind.INSERT) == polished
    assert all(op.text for op in ops)


def test_identical_text_is_single_equal_op(diff_engine):
    ops = diff_engine.generate_diff("Hello World", "Hello World")
    assert ops == [DiffOp(OpKind.EQUAL, "Hello World")]
    assert diff_engine.get_changes(ops) == []


def test_empty_inputs_produce_no_ops(diff_engine):
    assert diff_engine.generate_diff("", "") == []


def test_semantic_cleanup_merges_whole_words(diff_engine):
    # Without cleanup the shared "o" splits the edit into micro-diffs.
    changes = diff_engine.diff_changes("Great job 😀", "Great work 😀")
    assert changes == [ChangePair(original_text="job", polished_text="work")]


def test_completely_different_words_become_one_replacement(diff_engine):
    assert diff_engine.diff_changes("Hello", "World") == [ChangePair("Hello", "World")]


def test_suffix_addition_is_an_insertion(diff_engine):
    assert diff_engine.diff_changes("method", "methodology") == [ChangePair("", "ology")]


def test_get_changes_pairs_delete_followed_by_insert():
    ops = [
        DiffOp(OpKind.EQUAL, "a "),
        DiffOp(OpKind.DELETE, "new"),
        DiffOp(OpKind.INSERT, "novel"),
        DiffOp(OpKind.EQUAL, " method"),
    ]
    assert DiffEngine.get_changes(ops) == [ChangePair("new", "novel")]


def test_get_changes_lone_ops_and_order():
    ops = [
        DiffOp(OpKind.DELETE, "x"),
        DiffOp(OpKind.EQUAL, " "),
        DiffOp(OpKind.INSERT, "y"),
        DiffOp(OpKind.EQUAL, " "),
        DiffOp(OpKind.DELETE, "old"),
        DiffOp(OpKind.INSERT, "new"),
        DiffOp(OpKind.DELETE, "tail"),
    ]
    assert DiffEngine.get_changes(ops) == [
        ChangePair("x", ""),
        ChangePair("", "y"),
        ChangePair("old", "new"),
        ChangePair("tail", ""),
    ]


def test_get_changes_insert_then_delete_is_not_a_replacement():
    ops = [DiffOp(OpKind.INSERT, "in"), DiffOp(OpKind.DELETE, "out")]
    assert DiffEngine.get_changes(ops) == [ChangePair("", "in"), ChangePair("out", "")]


def test_settings_are_applied():
    engine = DiffEngine(timeout_sec=0.5, edit_cost=6)
    dmp = engine._new_dmp()
    assert dmp.Diff_Timeout == 0.5
    assert dmp.Diff_EditCost == 6
