"""End-to-end rewrites compared against golden files."""

import shutil
from pathlib import Path

import pytest

from fieldretype.config import RewriteConfig
from fieldretype.core.pipeline import run_rewrite
from fieldretype.errors import RecordNotFoundError
from fieldretype.models import Locator, RewriteSpec

CASES = [
    ("field_type_modify", Locator(record="foo", field="bar"), RewriteSpec(from_type="string", to_type="[]byte"), False),
    ("all_structs", Locator(all=True), RewriteSpec(from_type="int", to_type="int64"), False),
    ("anonymous_field", Locator(all=True), RewriteSpec(from_type="string", to_type="Raw"), False),
    ("skip_unexported", Locator(record="Config"), RewriteSpec(from_type="string", to_type="[]byte"), True),
    ("line_range", Locator(line="5,6"), RewriteSpec(from_type="string", to_type="[]byte"), False),
    ("nested_struct", Locator(record="inner"), RewriteSpec(from_type="string", to_type="[]byte"), False),
]


@pytest.mark.parametrize(("name", "locator", "spec", "skip_unexported"), CASES, ids=[case[0] for case in CASES])
def test_rewrite_matches_golden(
    fixtures_dir: Path, name: str, locator: Locator, spec: RewriteSpec, skip_unexported: bool
) -> None:
    config = RewriteConfig(
        file=fixtures_dir / f"{name}.input",
        locator=locator,
        spec=spec,
        skip_unexported=skip_unexported,
    )

    outcome = run_rewrite(config)

    assert outcome.output == (fixtures_dir / f"{name}.golden").read_text()


def test_rewriting_golden_again_changes_nothing(fixtures_dir: Path) -> None:
    config = RewriteConfig(
        file=fixtures_dir / "all_structs.golden",
        locator=Locator(all=True),
        spec=RewriteSpec(from_type="int", to_type="int64"),
    )

    outcome = run_rewrite(config)

    assert outcome.result.rewritten == []
    assert outcome.output == (fixtures_dir / "all_structs.golden").read_text()


def test_write_back(tmp_path: Path, fixtures_dir: Path) -> None:
    target = tmp_path / "main.go"
    shutil.copy(fixtures_dir / "field_type_modify.input", target)
    config = RewriteConfig(
        file=target,
        locator=Locator(record="foo", field="bar"),
        spec=RewriteSpec(from_type="string", to_type="[]byte"),
        write=True,
    )

    run_rewrite(config)

    assert target.read_text() == (fixtures_dir / "field_type_modify.golden").read_text()


def test_failed_selection_leaves_file_untouched(tmp_path: Path, fixtures_dir: Path) -> None:
    target = tmp_path / "main.go"
    shutil.copy(fixtures_dir / "field_type_modify.input", target)
    original = target.read_bytes()
    config = RewriteConfig(
        file=target,
        locator=Locator(record="missing"),
        spec=RewriteSpec(from_type="string", to_type="[]byte"),
        write=True,
    )

    with pytest.raises(RecordNotFoundError):
        run_rewrite(config)

    assert target.read_bytes() == original


def test_gofmt_output(fixtures_dir: Path, gofmt_binary: str) -> None:
    config = RewriteConfig(
        file=fixtures_dir / "all_structs.input",
        locator=Locator(all=True),
        spec=RewriteSpec(from_type="int", to_type="int64"),
        gofmt=True,
        gofmt_binary=gofmt_binary,
    )

    outcome = run_rewrite(config)

    assert outcome.output == (fixtures_dir / "all_structs.golden").read_text()
