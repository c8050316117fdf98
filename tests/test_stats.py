import threading

from helpers import stats
from helpers.stats import BasicDetailedStats, DetailStatistics, DummyDetailedStats


def _hammer(s):
    for _ in range(10):
        s.increment_trials()
        s.increment_local_opts()
        s.increment_fitness_evals()
        s.increment_gradient_evals()
        s.increment_sanity_discards()
        s.increment_unknown("niche hits")


def test_disabled_counters_stay_zero():
    s = DetailStatistics()
    _hammer(s)
    assert s.get_total_trials() == 0
    assert s.get_total_local_opts() == 0
    assert s.get_total_fitness_evals() == 0
    assert s.get_total_gradient_evals() == 0
    assert s.get_total_sanity_discards() == 0
    assert s.get_all_unknown_counters() == {}


def test_enabled_counts_exactly():
    s = DetailStatistics()
    s.enable_all_details()
    for _ in range(37):
        s.increment_trials()
    assert s.get_total_trials() == 37
    assert s.get_total_fitness_evals() == 0


def test_enable_is_irreversible_and_idempotent():
    s = DetailStatistics()
    s.enable_all_details()
    s.increment_trials()
    s.enable_all_details()
    assert s.enabled
    assert s.get_total_trials() == 1


def test_custom_counters_accumulate():
    s = DetailStatistics(enabled=True)
    s.increment_unknown("cache misses")
    s.increment_unknown("cache misses")
    s.increment_unknown("restarts")
    assert s.get_all_unknown_counters() == {"cache misses": 2, "restarts": 1}


def test_unknown_counters_are_a_copy():
    s = DetailStatistics(enabled=True)
    s.increment_unknown("x")
    snapshot = s.get_all_unknown_counters()
    snapshot["x"] = 100
    assert s.get_all_unknown_counters() == {"x": 1}


def test_report_when_disabled():
    out = DetailStatistics().get_output()
    assert "Detailed statistics were not enabled." in out
    assert not any(line.startswith("Total number of trials") for line in out)


def test_report_when_enabled():
    s = DetailStatistics(enabled=True)
    for _ in range(3):
        s.increment_trials()
    s.increment_local_opts()
    s.increment_unknown("niche hits")
    out = s.get_output()
    text = "\n".join(out)
    assert "APPROXIMATIVE" in text
    assert "Total number of trials:                3" in out
    assert "      translated to child individuals: 6" in out
    assert "Number of local optimizations:         1" in out
    assert "Number of niche hits: 1" in out
    lines = [l for l in out if l.startswith("Number of")]
    assert len(lines) == 5


def test_threads_do_not_lose_increments():
    s = DetailStatistics(enabled=True)
    threads = [threading.Thread(target=lambda: [_hammer(s) for _ in range(100)]) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert s.get_total_trials() == 8000
    assert s.get_total_sanity_discards() == 8000
    assert s.get_all_unknown_counters() == {"niche hits": 8000}


def test_backends():
    dummy = DummyDetailedStats()
    dummy.increment_trials()
    assert dummy.get_total_trials() == 0
    basic = BasicDetailedStats()
    basic.increment_gradient_evals()
    assert basic.get_total_gradient_evals() == 1


def test_process_wide_facade():
    stats.increment_trials()
    assert stats.get_total_trials() == 0
    assert "Detailed statistics were not enabled." in stats.get_output()
    stats.enable_all_details()
    stats.increment_trials()
    stats.increment_unknown("x")
    assert stats.get_total_trials() == 1
    assert stats.get_statistics().get_all_unknown_counters() == {"x": 1}


def test_process_wide_getters():
    stats.enable_all_details()
    stats.increment_local_opts()
    stats.increment_fitness_evals()
    stats.increment_fitness_evals()
    stats.increment_gradient_evals()
    stats.increment_sanity_discards()
    stats.increment_unknown("restarts")
    stats.increment_unknown("restarts")
    assert stats.get_total_local_opts() == 1
    assert stats.get_total_fitness_evals() == 2
    assert stats.get_total_gradient_evals() == 1
    assert stats.get_total_sanity_discards() == 1
    assert stats.get_all_unknown_counters() == {"restarts": 2}
