import json

import pytest

from devhub.core.exceptions import (
    MalformedPromoDocumentError,
    MalformedSeedError,
    MissingPromoDocumentError,
)
from devhub.core.seed import load_promo, load_promo_or_empty, load_seed, parse_promo, parse_seed


def test_parse_seed_reads_every_collection(seed_data):
    seed = parse_seed(json.dumps(seed_data))

    assert [e.slug for e in seed.ecosystems] == ["tokio", "embedded"]
    assert [t.slug for t in seed.tools] == ["cargo-nextest", "clippy", "bacon"]
    assert len(seed.events) == 4
    assert len(seed.learning_paths) == 2
    assert len(seed.creators) == 6
    assert len(seed.posts) == 3
    assert len(seed.resources) == 4
    assert [s.slug for s in seed.job_sources] == ["beta", "alpha"]
    assert seed.taxonomy.labels[0].name == "Testing"
    assert seed.jobs[0].company.name == "Acme"
    assert seed.pages.learn.tracks == ["async", "basics"]


def test_empty_document_yields_empty_collections():
    seed = parse_seed("{}")

    assert seed.ecosystems == []
    assert seed.posts == []
    assert seed.pages.tools.categories == []
    assert seed.taxonomy.labels == []


def test_optional_fields_default():
    seed = parse_seed(json.dumps({"tools": [{"slug": "bacon", "name": "bacon"}]}))
    tool = seed.tools[0]

    assert tool.category == ""
    assert tool.labels == []
    assert tool.featured_media is None
    assert tool.updates is None


def test_unknown_keys_are_ignored():
    seed = parse_seed(json.dumps({"tools": [{"slug": "bacon", "name": "bacon", "stars": 5}], "extra": 1}))

    assert seed.tools[0].slug == "bacon"


@pytest.mark.parametrize(
    ("deprecated", "canonical", "attribute"),
    [
        ("protocols", "ecosystems", "ecosystems"),
        ("news", "posts", "posts"),
        ("jobs_sources", "job_sources", "job_sources"),
    ],
)
def test_deprecated_collection_keys(deprecated, canonical, attribute):
    records = {
        "ecosystems": [{"slug": "old", "name": "Old"}],
        "posts": [{"slug": "old", "title": "Old"}],
        "job_sources": [{"slug": "old", "name": "Old", "url": "https://old.example"}],
    }[canonical]

    seed = parse_seed(json.dumps({deprecated: records}))

    assert [item.slug for item in getattr(seed, attribute)] == ["old"]


def test_canonical_key_wins_over_deprecated_one():
    raw = {
        "protocols": [{"slug": "legacy", "name": "Legacy"}],
        "ecosystems": [{"slug": "current", "name": "Current"}],
    }

    seed = parse_seed(json.dumps(raw))

    assert [e.slug for e in seed.ecosystems] == ["current"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"tools": "nope"}),
        json.dumps({"tools": [{"name": "missing slug"}]}),
        json.dumps({"creators": [{"slug": "x", "name": "No type"}]}),
        json.dumps({"learning_paths": [{"slug": "x", "title": "X", "duration_hours": -1}]}),
    ],
)
def test_malformed_seed(raw):
    with pytest.raises(MalformedSeedError):
        parse_seed(raw)


def test_load_seed_missing_file(tmp_path):
    with pytest.raises(MalformedSeedError, match="Cannot read seed document"):
        load_seed(tmp_path / "seed.json")


def test_load_seed_from_disk(tmp_path, seed_data):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed_data), encoding="utf-8")

    assert load_seed(path).ecosystems[0].name == "Tokio"


def test_parse_promo():
    promo = parse_promo(json.dumps({"slides": [{"type": "promo", "title": "Launch"}]}))

    assert promo.slides[0].title == "Launch"
    assert promo.slides[0].kind == ""


def test_missing_promo(tmp_path):
    with pytest.raises(MissingPromoDocumentError):
        load_promo(tmp_path / "promo.json")


def test_malformed_promo(tmp_path):
    path = tmp_path / "promo.json"
    path.write_text('{"slides": 3}', encoding="utf-8")

    with pytest.raises(MalformedPromoDocumentError):
        load_promo(path)


@pytest.mark.parametrize("content", [None, "{broken"])
def test_promo_failures_degrade_to_no_slides(tmp_path, caplog, content):
    path = tmp_path / "promo.json"
    if content is not None:
        path.write_text(content, encoding="utf-8")

    promo = load_promo_or_empty(path)

    assert promo.slides == []
    assert "continuing without promo slides" in caplog.text
