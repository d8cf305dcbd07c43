from pathlib import Path

from zh_check.files import iter_source_files


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def test_iter_source_files(tmp_path):
    _touch(
        tmp_path,
        "a.vue",
        "sub/b.js",
        ".hidden/c.vue",
        "sub/.d.vue",
        "node_modules/e.js",
        "f.txt",
    )
    found = iter_source_files(tmp_path, ["**/*.vue", "**/*.js"], ["node_modules/**"])
    assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.vue", "sub/b.js"]


def test_double_star_ignore_matches_top_level(tmp_path):
    _touch(tmp_path, "x.spec.js", "sub/y.spec.js", "z.js")
    found = iter_source_files(tmp_path, ["**/*.js"], ["**/*.spec.js"])
    assert [p.name for p in found] == ["z.js"]


def test_overlapping_rules_are_deduplicated(tmp_path):
    _touch(tmp_path, "a.vue")
    assert len(iter_source_files(tmp_path, ["**/*.vue", "*.vue"])) == 1


def test_missing_root(tmp_path):
    assert iter_source_files(tmp_path / "missing", ["**/*.vue"]) == []
