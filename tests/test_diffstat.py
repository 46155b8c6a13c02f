from __future__ import annotations

import logging

from conftest import lines

from repostats.git.diffstat import DiffStat, commit_stats, diff_stats
from repostats.git.history import walk_full_history


def test_root_commit_is_diffed_against_empty_tree(builder) -> None:
    builder.commit("feat: init", {"a.txt": lines(7), "b.txt": lines(3)})

    record = next(walk_full_history(builder.git_repo()))
    stat = commit_stats(builder.git_repo(), record)

    assert stat == DiffStat(files_changed=2, insertions=10, deletions=0)


def test_child_commit_is_diffed_against_parent(builder) -> None:
    builder.commit("one", {"a.txt": lines(5)})
    builder.commit("two", {"a.txt": lines(3) + "new\n", "b.txt": "b\n"})

    record = next(walk_full_history(builder.git_repo()))
    stat = commit_stats(builder.git_repo(), record)

    assert stat == DiffStat(files_changed=2, insertions=2, deletions=2)


def test_merge_commit_uses_first_parent_only(builder) -> None:
    root = builder.commit("root", {"a.txt": "a\n"})
    main = builder.commit("main", {"b.txt": "b\n"})
    side = builder.commit("side", {"c.txt": lines(4)}, parents=[root], head=False)
    builder.commit("merge", {}, parents=[main, side])

    record = next(walk_full_history(builder.git_repo()))
    stat = commit_stats(builder.git_repo(), record)

    # Against main the merge only brings in c.txt.
    assert stat == DiffStat(files_changed=1, insertions=4, deletions=0)


def test_diff_between_arbitrary_trees(builder) -> None:
    first = builder.commit("one", {"a.txt": lines(4)})
    builder.commit("two", {"a.txt": lines(2)})
    third = builder.commit("three", {"b.txt": "b\n"})

    stat = diff_stats(builder.git_repo(), first.tree, third.tree)

    assert stat == DiffStat(files_changed=2, insertions=1, deletions=2)


def test_failed_diff_yields_zero_stats(builder, caplog) -> None:
    commit = builder.commit("one", {"a.txt": "a\n"})

    with caplog.at_level(logging.WARNING, logger="repostats.git.diffstat"):
        stat = diff_stats(builder.git_repo(), "f" * 40, commit.tree)

    assert stat == DiffStat()
    assert "Could not compute diff stats" in caplog.text


def test_numstat_parsing_counts_binary_files_without_lines() -> None:
    output = "3\t1\tsrc/app.py\n-\t-\tlogo.png\n0\t5\tREADME.md"

    assert DiffStat.from_numstat(output) == DiffStat(files_changed=3, insertions=3, deletions=6)
    assert DiffStat.from_numstat("") == DiffStat()


def test_stats_add_up() -> None:
    assert DiffStat(1, 2, 3) + DiffStat(4, 5, 6) == DiffStat(5, 7, 9)
