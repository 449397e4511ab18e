from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from propsim.config import freeze_config, load_config, serialize_config, verify_config_lock
from propsim.runtime import create_run_context
from propsim.simulator import RiskModel

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def _write(tmp_path, payload):
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_load_config_sample():
    config = load_config(DEFAULT_CONFIG)
    assert config.simulation.risk_model == RiskModel.FIXED_PNL
    assert config.simulation.num_simulations == 1000
    assert config.prop_firm.express_payouts_required == 5
    assert config.controller.batch_size == 50
    assert config.report.duration_years is None


def test_defaults_for_optional_sections(tmp_path):
    path = _write(
        tmp_path,
        {
            "name": "minimal",
            "version": 2,
            "simulation": {
                "initial_equity": 2500,
                "num_simulations": 10,
                "trades_per_simulation": 5,
                "risk_model": "percent_equity",
            },
        },
    )
    config = load_config(path)
    assert config.run_id_prefix == "minimal"
    assert config.version == "2"
    assert config.simulation.risk_model == RiskModel.PERCENT_EQUITY
    assert config.simulation.seed == 12345
    assert config.prop_firm.account_size == 50000
    assert serialize_config(config)["simulation"]["risk_model"] == "percent_equity"


def test_missing_simulation_section_is_rejected(tmp_path):
    path = _write(tmp_path, {"name": "broken", "version": 1})
    with pytest.raises(ValueError, match="simulation"):
        load_config(path)


def test_invalid_values_are_rejected(tmp_path):
    base = {"initial_equity": 1000, "num_simulations": 10, "trades_per_simulation": 5}
    path = _write(tmp_path, {"name": "x", "version": 1, "simulation": {**base, "risk_model": "martingale"}})
    with pytest.raises(ValueError, match="risk_model"):
        load_config(path)

    path = _write(tmp_path, {"name": "x", "version": 1, "simulation": {**base, "num_simulations": 0}})
    with pytest.raises(ValueError, match="num_simulations"):
        load_config(path)


def test_freeze_and_verify(tmp_path):
    target = tmp_path / "default.yaml"
    target.write_text(DEFAULT_CONFIG.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    context = create_run_context(target, "propsim")
    assert context.run_id.startswith("propsim-")
    assert context.run_id.endswith(context.config_hash[:8])

    target.write_text(target.read_text(encoding="utf-8") + "\n# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)
