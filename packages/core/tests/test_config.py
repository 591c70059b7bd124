"""Tests for configuration loading and validation."""

import pytest

from teamgate_core.config import load_config, validate_config, validate_required_approvals
from teamgate_core.errors import InvalidConfiguration


@pytest.fixture(autouse=True)
def _clear_action_inputs(monkeypatch):
    for var in ("INPUT_TEAM_NAME", "INPUT_REQUIRED_APPROVALS", "INPUT_ORG"):
        monkeypatch.delenv(var, raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["team_name"] is None
    assert config["org"] is None
    assert config["required_approvals"] == 1
    assert config["status_context"] == "teamgate/team-approval"
    assert config["report"] == ["status", "output"]
    assert config["fail_on_unsatisfied"] is False


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: core-reviewers\nrequired_approvals: 2\n")
    config = load_config(config_path=str(cfg))
    assert config["team_name"] == "core-reviewers"
    assert config["required_approvals"] == 2


def test_action_inputs_override_config_file(tmp_path, monkeypatch):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: core-reviewers\nrequired_approvals: 2\n")
    monkeypatch.setenv("INPUT_TEAM_NAME", "security")
    monkeypatch.setenv("INPUT_REQUIRED_APPROVALS", "3")
    config = load_config(config_path=str(cfg))
    assert config["team_name"] == "security"
    assert config["required_approvals"] == "3"


def test_empty_action_input_ignored(tmp_path, monkeypatch):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: core-reviewers\n")
    monkeypatch.setenv("INPUT_TEAM_NAME", "")
    assert load_config(config_path=str(cfg))["team_name"] == "core-reviewers"


def test_cli_overrides_everything(tmp_path, monkeypatch):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: core-reviewers\n")
    monkeypatch.setenv("INPUT_TEAM_NAME", "security")
    config = load_config(config_path=str(cfg), cli_overrides={"team_name": "docs"})
    assert config["team_name"] == "docs"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: core-reviewers\n")
    config = load_config(config_path=str(cfg), cli_overrides={"team_name": None})
    assert config["team_name"] == "core-reviewers"


def test_non_mapping_config_file_rejected(tmp_path):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(InvalidConfiguration):
        load_config(config_path=str(cfg))


def test_github_token_loaded_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    assert load_config(config_path="nonexistent.yml")["github_token"] == "gh-token"


def test_report_list_is_not_shared_reference(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["report"].append("status")
    assert config_b["report"] == ["status", "output"]


class TestValidateRequiredApprovals:
    @pytest.mark.parametrize("value, expected", [(0, 0), (2, 2), ("3", 3), (" 1 ", 1)])
    def test_accepts_non_negative_integers(self, value, expected):
        assert validate_required_approvals(value) == expected

    @pytest.mark.parametrize("value", [None, "", "-1", -1, "two", "2.5", 2.5, True, [2]])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidConfiguration):
            validate_required_approvals(value)


class TestValidateConfig:
    def test_normalises_values(self):
        config = validate_config({"team_name": " core ", "required_approvals": "2", "report": "status, output"})
        assert config["team_name"] == "core"
        assert config["required_approvals"] == 2
        assert config["report"] == ["status", "output"]

    def test_missing_team_rejected(self):
        with pytest.raises(InvalidConfiguration, match="team_name"):
            validate_config({"team_name": None, "required_approvals": 1, "report": []})

    def test_unknown_reporter_rejected(self):
        with pytest.raises(InvalidConfiguration, match="slack"):
            validate_config({"team_name": "core", "required_approvals": 1, "report": ["slack"]})

    def test_is_idempotent(self):
        config = validate_config({"team_name": "core", "required_approvals": "1", "report": ["status"]})
        assert validate_config(dict(config)) == config


def test_yaml_syntax_error_rejected(tmp_path):
    cfg = tmp_path / ".teamgate.yml"
    cfg.write_text("team_name: [core\n")
    with pytest.raises(InvalidConfiguration, match="not valid YAML"):
        load_config(config_path=str(cfg))


class TestValidateReportList:
    @pytest.mark.parametrize("report", [5, {"status": True}, 2.0])
    def test_non_list_report_rejected(self, report):
        with pytest.raises(InvalidConfiguration, match="report"):
            validate_config({"team_name": "core", "required_approvals": 1, "report": report})

    def test_non_string_entry_rejected(self):
        with pytest.raises(InvalidConfiguration, match="Unknown reporter"):
            validate_config({"team_name": "core", "required_approvals": 1, "report": ["status", 1]})
