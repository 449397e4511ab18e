from propsim.prop_firm import (
    MAX_CAREER_ATTEMPTS,
    Phase,
    PropFirmConfig,
    VirtualTraderCareer,
    run_prop_firm_simulation,
    simulate_day,
)
from propsim.simulator import HistoricalTrade, Mulberry32


def _trades(*pnls):
    return [HistoricalTrade(pnl=pnl) for pnl in pnls]


def _config(**overrides):
    values = dict(
        account_size=50000,
        max_daily_loss=1000,
        max_total_loss=2000,
        profit_target_eval=3000,
        max_daily_profit_eval=1500,
        express_payout_threshold=150,
        express_payouts_required=5,
        express_days_for_payout=5,
        trades_per_day=3,
    )
    values.update(overrides)
    return PropFirmConfig(**values)


def test_simulate_day_draws_at_least_one_trade():
    rng = Mulberry32(4)
    for _ in range(100):
        assert simulate_day([10.0], rng, 1) == 10.0
    for _ in range(100):
        assert simulate_day([10.0], rng, 4) in {20.0, 30.0, 40.0, 50.0, 60.0}
    assert simulate_day([10.0], rng, 0) == 10.0


def test_zero_daily_loss_blows_every_attempt_on_day_one():
    stats = run_prop_firm_simulation(_trades(-50, 0), _config(max_daily_loss=0), num_traders=20, seed=3)
    assert stats.eval_blown == stats.eval_attempts
    assert stats.eval_attempts == 20 * MAX_CAREER_ATTEMPTS
    assert stats.eval_passed == 0
    assert stats.express_attempts == 0
    assert stats.live_reached == 0
    assert stats.eval_pass_rate == 0.0


def test_steady_winner_reaches_live_on_first_attempt():
    stats = run_prop_firm_simulation(_trades(200), _config(trades_per_day=1), num_traders=25, seed=8)
    assert stats.eval_attempts == 25
    assert stats.eval_passed == 25
    assert stats.eval_blown == 0
    assert stats.express_attempts == 25
    assert stats.express_payouts_total == 25 * 5
    assert stats.live_reached == 25
    assert stats.live_reached_rate == 1.0
    assert stats.express_pass_rate == 1.0
    assert stats.avg_attempts_to_express == 1.0
    assert stats.avg_attempts_to_first_payout == 1.0
    assert stats.avg_attempts_to_live == 1.0
    assert stats.blown_after_first_payout == 0


def test_daily_profit_cap_slows_evaluation():
    # 200 per day capped at 100 needs 30 days instead of 15; still passes.
    stats = run_prop_firm_simulation(_trades(200), _config(trades_per_day=1, max_daily_profit_eval=100), num_traders=5)
    assert stats.eval_passed == 5


def test_unreachable_target_terminates_at_day_cap():
    stats = run_prop_firm_simulation(_trades(0), _config(profit_target_eval=1e12), num_traders=3, seed=1)
    assert stats.eval_attempts == 3
    assert stats.eval_blown == 0
    assert stats.eval_passed == 0
    assert stats.avg_attempts_to_express == 0.0


def test_funnel_conservation_on_mixed_pool():
    trades = _trades(420, -380, 150, -90, 610, -720, 55, 240, -160)
    stats = run_prop_firm_simulation(trades, _config(), num_traders=200, seed=12345)
    assert stats.eval_passed <= stats.eval_attempts
    assert stats.eval_blown <= stats.eval_attempts
    assert stats.express_attempts <= stats.eval_passed
    assert stats.live_reached <= stats.express_attempts
    assert stats.express_blown <= stats.express_attempts
    assert stats.blown_after_first_payout <= stats.express_blown
    assert stats.express_payouts_total >= stats.live_reached * 5
    assert 0.0 <= stats.live_reached_rate <= 1.0


def test_same_seed_is_reproducible():
    trades = _trades(420, -380, 150, -90, 610, -720)
    first = run_prop_firm_simulation(trades, _config(), num_traders=100, seed=77)
    assert first == run_prop_firm_simulation(trades, _config(), num_traders=100, seed=77)
    assert first != run_prop_firm_simulation(trades, _config(), num_traders=100, seed=78)


def test_empty_pool_returns_zero_funnel():
    stats = run_prop_firm_simulation([], _config(), num_traders=10)
    assert stats.total_traders == 10
    assert stats.eval_attempts == 0
    assert stats.live_reached_rate == 0.0


def test_career_restart_and_payouts():
    career = VirtualTraderCareer(account_size=50000)
    career.balance = 48500
    career.eval_progress = 900
    career.promote_to_express()
    assert career.phase == Phase.EXPRESS
    assert career.balance == 50000
    assert career.eval_progress == 0

    career.express_qualifying_days = 5
    assert career.record_payout(payouts_required=2) is False
    assert career.express_qualifying_days == 0
    assert career.received_payout is True

    career.restart()
    assert career.phase == Phase.EVAL
    assert career.career_attempt == 2
    assert career.express_payouts == 0
    assert career.received_payout is True

    career.promote_to_express()
    career.record_payout(payouts_required=2)
    assert career.record_payout(payouts_required=2) is True
    assert career.phase == Phase.LIVE
