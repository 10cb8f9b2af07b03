import json
from pathlib import Path

import pytest

from fifa_wage_model.coefficients import CoefficientSnapshot, CoefficientStore, read_coefficients
from fifa_wage_model.errors import SourceUnavailable


def _write(path: Path, rows) -> Path:
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_read_coefficients_parses_strings_and_numbers(tmp_path: Path):
    path = _write(
        tmp_path / "coefs.json",
        [{"term": "Intercept", "estimate": "6.0"}, {"term": "age", "estimate": -0.01}],
    )

    coefs, issues = read_coefficients(path)
    assert coefs == {"Intercept": pytest.approx(6.0), "age": pytest.approx(-0.01)}
    assert issues == []


def test_malformed_estimate_is_reported_and_zeroed(tmp_path: Path):
    path = _write(
        tmp_path / "coefs.json",
        [
            {"term": "Intercept", "estimate": "6.0"},
            {"term": "age", "estimate": "n/a"},
            {"term": "overall_rating", "estimate": None},
        ],
    )

    snapshot = CoefficientStore(path).load()
    assert snapshot.ok
    assert snapshot.get("age") == 0.0
    assert snapshot.get("overall_rating") == 0.0
    assert [issue.term for issue in snapshot.issues] == ["age", "overall_rating"]
    assert snapshot.issues[0].raw == "n/a"


def test_missing_source_raises_on_strict_read(tmp_path: Path):
    with pytest.raises(SourceUnavailable):
        read_coefficients(tmp_path / "missing.json")


def test_unparseable_source_degrades_to_empty(tmp_path: Path):
    path = tmp_path / "coefs.json"
    path.write_text("not json at all", encoding="utf-8")

    snapshot = CoefficientStore(path).load()
    assert not snapshot.ok
    assert isinstance(snapshot.error, SourceUnavailable)
    assert len(snapshot) == 0
    assert snapshot.get("Intercept") == 0.0


def test_missing_columns_is_unavailable(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [{"name": "Intercept", "value": 1.0}])

    with pytest.raises(SourceUnavailable):
        read_coefficients(path)


def test_empty_array_is_empty_mapping(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [])
    assert read_coefficients(path) == ({}, [])


def test_snapshot_is_read_only(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [{"term": "Intercept", "estimate": 1.0}])
    snapshot = CoefficientStore(path).load()

    with pytest.raises(TypeError):
        snapshot.coefficients["Intercept"] = 2.0  # type: ignore[index]


def test_reload_produces_new_snapshot(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [{"term": "Intercept", "estimate": 1.0}])
    store = CoefficientStore(path)
    first = store.load()

    _write(path, [{"term": "Intercept", "estimate": 2.0}, {"term": "age", "estimate": 0.5}])
    second = store.reload()

    assert first.get("Intercept") == 1.0
    assert len(first) == 1
    assert second.get("Intercept") == 2.0
    assert store.snapshot is second


def test_store_without_source():
    store = CoefficientStore()
    assert store.snapshot == CoefficientSnapshot()
    with pytest.raises(ValueError):
        store.load()


def test_to_frame(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [{"term": "Intercept", "estimate": 1.0}, {"term": "age", "estimate": -0.5}])
    frame = CoefficientStore(path).load().to_frame()

    assert list(frame.columns) == ["term", "estimate"]
    assert list(frame["term"]) == ["Intercept", "age"]


def test_as_records_matches_frame(tmp_path: Path):
    path = _write(tmp_path / "coefs.json", [{"term": "Intercept", "estimate": "6.0"}, {"term": "age", "estimate": -0.01}])
    snapshot = CoefficientStore(path).load()

    records = snapshot.as_records()
    assert [(c.term, c.estimate) for c in records] == [("Intercept", 6.0), ("age", -0.01)]
    assert snapshot.to_frame().to_dict(orient="records") == [c.model_dump() for c in records]


def test_empty_snapshot_frame_has_columns():
    frame = CoefficientSnapshot().to_frame()
    assert frame.empty
    assert list(frame.columns) == ["term", "estimate"]
