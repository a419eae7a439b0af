import json

import pytest

from ads_ops.apply import prepare_mutation as pm
from ads_ops.apply.prepare_mutation import (
    MutationRequestError,
    RequestWriter,
    env_flag,
    load_exempt_entities,
    load_operations,
    main,
    prepare_mutation,
)
from ads_ops.transform.errors import UnresolvedEntityError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GOOGLE_ADS_CUSTOMER_ID", "ADS_OPS_PARTIAL_FAILURE", "ADS_OPS_DRY_RUN"):
        monkeypatch.delenv(name, raising=False)
    # keep developer .env files out of the CLI tests
    monkeypatch.setattr(pm, "load_env", lambda: False)


OPERATIONS = [
    {"entity": "campaign", "operation": "update", "resource": {"resource_name": "customers/1/campaigns/2", "status": "PAUSED"}},
    {"remove": "customers/123/labels/789"},
]


def test_prepare_mutation_defaults():
    request = prepare_mutation({"customer_id": "123-456-7890", "operations": OPERATIONS})

    assert request["customer_id"] == "1234567890"
    assert request["options"] == {"partial_failure": True, "validate_only": True}
    assert request["operations"][0] is OPERATIONS[0]
    assert request["operations"][1] == {
        "entity": "label",
        "operation": "remove",
        "resource": "customers/123/labels/789",
    }
    assert request["warnings"] == ["Operation 1: Transformed from standard format (entity: label)"]
    assert request["summary"] == {
        "operations_count": 2,
        "transformed_count": 1,
        "by_entity": {"campaign": 1, "label": 1},
        "by_operation": {"update": 1, "remove": 1},
    }


def test_prepare_mutation_explicit_flags():
    request = prepare_mutation({
        "customer_id": "1",
        "operations": OPERATIONS,
        "partial_failure": False,
        "dry_run": False,
    })

    assert request["options"] == {"partial_failure": False, "validate_only": False}


def test_prepare_mutation_reads_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_ADS_CUSTOMER_ID", "999")
    monkeypatch.setenv("ADS_OPS_DRY_RUN", "false")
    monkeypatch.setenv("ADS_OPS_PARTIAL_FAILURE", "FALSE")

    request = prepare_mutation({"operations": OPERATIONS})

    assert request["customer_id"] == "999"
    assert request["options"] == {"partial_failure": False, "validate_only": False}


def test_prepare_mutation_requires_customer_id():
    with pytest.raises(MutationRequestError, match="customer_id is required"):
        prepare_mutation({"operations": OPERATIONS})


@pytest.mark.parametrize("operations", [None, [], "customers/1/labels/2"])
def test_prepare_mutation_requires_operations(operations):
    with pytest.raises(MutationRequestError, match="operations array is required"):
        prepare_mutation({"customer_id": "1", "operations": operations})


def test_prepare_mutation_propagates_normalization_errors():
    with pytest.raises(UnresolvedEntityError, match="Operation 0"):
        prepare_mutation({"customer_id": "1", "operations": [{"create": {"some_unknown_field": "v"}}]})


def test_env_flag(monkeypatch):
    assert env_flag("ADS_OPS_DRY_RUN", True) is True
    monkeypatch.setenv("ADS_OPS_DRY_RUN", "")
    assert env_flag("ADS_OPS_DRY_RUN", False) is False
    monkeypatch.setenv("ADS_OPS_DRY_RUN", " True ")
    assert env_flag("ADS_OPS_DRY_RUN", False) is True


def test_load_exempt_entities(tmp_path):
    assert load_exempt_entities(tmp_path / "missing.json") == {"campaign_budget"}

    path = tmp_path / "entities.json"
    path.write_text(json.dumps(["bidding_strategy"]))
    assert load_exempt_entities(path) == {"campaign_budget", "bidding_strategy"}

    path.write_text(json.dumps({"entities": []}))
    with pytest.raises(MutationRequestError):
        load_exempt_entities(path)


def test_packaged_exempt_entities_config():
    assert "campaign_budget" in load_exempt_entities()


def test_load_operations(tmp_path):
    path = tmp_path / "ops.json"
    path.write_text(json.dumps({"operations": OPERATIONS}))
    assert load_operations(path) == OPERATIONS

    path.write_text(json.dumps(OPERATIONS))
    assert load_operations(path) == OPERATIONS

    path.write_text(json.dumps({"ops": []}))
    with pytest.raises(MutationRequestError):
        load_operations(path)

    with pytest.raises(MutationRequestError, match="not found"):
        load_operations(tmp_path / "missing.json")


def test_request_writer(tmp_path):
    request = prepare_mutation({"customer_id": "1", "operations": OPERATIONS})

    writer = RequestWriter(tmp_path / "batch.json", tmp_path / "out")
    json_path, md_path = writer.write_request(request)

    assert json_path.name == "batch.mutation.json"
    assert json.loads(json_path.read_text()) == request
    markdown = md_path.read_text()
    assert "# Mutation Request: batch" in markdown
    assert "| label | 1 |" in markdown
    assert "Operation 1: Transformed from standard format (entity: label)" in markdown


def test_main_writes_request(tmp_path, capsys):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(OPERATIONS))

    code = main([str(path), "--customer-id", "123-456", "--execute", "--no-partial-failure"])

    assert code == 0
    written = json.loads((tmp_path / "batch.mutation.json").read_text())
    assert written["customer_id"] == "123456"
    assert written["options"] == {"partial_failure": False, "validate_only": False}
    out = capsys.readouterr().out
    assert "[TRANSFORM] Operation 1" in out
    assert "Mode: LIVE" in out


def test_main_reports_normalization_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"remove": 42}]))

    assert main([str(path), "--customer-id", "1"]) == 1
    assert "'remove' value must be a resource_name string" in capsys.readouterr().out
    assert not (tmp_path / "bad.mutation.json").exists()


def test_main_usage_errors(capsys):
    assert main([]) == 1
    assert main(["--bogus"]) == 1
    assert main(["ops.json", "--customer-id"]) == 1
    assert main(["--help"]) == 0
