import shutil
from pathlib import Path

import pytest

from darmogen.pipeline import DEFAULT_CONFIG_FILENAME, load_config, run_pipeline

TEST_CASES_DIR = Path(__file__).parent / "test_data" / "test_cases"


def discover_test_cases():
    """Automatically discover all test cases from test_cases directory"""
    test_cases = []
    for test_dir in sorted(TEST_CASES_DIR.iterdir()):
        if not test_dir.is_dir() or test_dir.name.startswith("."):
            continue
        if not (test_dir / DEFAULT_CONFIG_FILENAME).exists():
            continue
        test_cases.append(test_dir)
    return test_cases


@pytest.mark.parametrize("test_dir", discover_test_cases(), ids=lambda test_dir: test_dir.name)
def test_reference_file_generation(test_dir, tmp_path):
    """Test model generation against reference files"""
    # Work on a copy, the output directory is relative to the options file
    project = tmp_path / test_dir.name
    shutil.copytree(test_dir, project, ignore=shutil.ignore_patterns("reference"))

    config = load_config(project / DEFAULT_CONFIG_FILENAME)
    result = run_pipeline(config)

    assert result.ok, result.parsed.errors + result.generated.errors

    reference_dir = test_dir / "reference"
    out_dir = Path(config.generator.out)

    expected = sorted(path.relative_to(reference_dir) for path in reference_dir.rglob("*.dart"))
    generated = sorted(path.relative_to(out_dir) for path in out_dir.rglob("*.dart"))
    assert generated == expected

    for relative in expected:
        assert (out_dir / relative).read_text() == (reference_dir / relative).read_text(), f"{relative} differs from reference"
