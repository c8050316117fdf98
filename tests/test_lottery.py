import logging
import threading

import pytest

from helpers import lottery
from helpers.generators import INT32_MAX, INT32_MIN, MersenneRNG, StandardRNG
from helpers.lottery import Lottery, LotteryNotInitializedError


def test_same_seed_same_sequence():
    lottery.set_generator(StandardRNG(1234))
    first = [lottery.get_instance().next_double() for _ in range(10)]
    lottery.set_generator(StandardRNG(1234))
    second = [lottery.get_instance().next_double() for _ in range(10)]
    assert first == second


def test_mixed_draws_are_reproducible():
    def draws():
        lot = lottery.get_instance()
        return [lot.next_boolean(), lot.next_float(), lot.next_gaussian(),
                lot.next_int(), lot.next_int(17), lot.next_long(), lot.next_double()]

    lottery.set_generator(MersenneRNG(99))
    a = draws()
    lottery.set_generator(MersenneRNG(99))
    assert draws() == a


def test_install_replaces_stream():
    lottery.set_generator(StandardRNG(1))
    lot = lottery.get_instance()
    lot.next_double()
    lottery.set_generator(StandardRNG(2))
    fresh = Lottery(StandardRNG(2))
    assert lot.next_double() == fresh.next_double()
    assert "2" in lot.information()


def test_draw_ranges():
    lot = Lottery(StandardRNG(7))
    for _ in range(2000):
        d = lot.next_double()
        f = lot.next_float()
        assert 0.0 <= d < 1.0
        assert 0.0 <= f < 1.0
        assert INT32_MIN <= lot.next_int() <= INT32_MAX
        assert -(2 ** 63) <= lot.next_long() < 2 ** 63
        assert isinstance(lot.next_boolean(), bool)


@pytest.mark.parametrize("n", [1, 2, 3, 10, 1000, 2 ** 31 - 1])
def test_bounded_int_stays_in_range(n):
    lot = Lottery(StandardRNG(n))
    for _ in range(500):
        assert 0 <= lot.next_int(n) < n


def test_bounded_int_covers_range():
    lot = Lottery(StandardRNG(3))
    seen = {lot.next_int(5) for _ in range(500)}
    assert seen == {0, 1, 2, 3, 4}


@pytest.mark.parametrize("n", [0, -1, -100])
def test_bounded_int_rejects_non_positive(n):
    with pytest.raises(ValueError):
        Lottery(StandardRNG(1)).next_int(n)


def test_self_initializes_with_warning(caplog):
    lot = lottery.get_instance()
    assert not lot.initialized
    with caplog.at_level(logging.WARNING, logger="helpers.lottery"):
        value = lot.next_double()
    assert 0.0 <= value < 1.0
    assert lot.initialized
    assert "no random number generator" in caplog.text
    assert "seed" in caplog.text
    assert caplog.records[0].stack_info is not None

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="helpers.lottery"):
        lot.next_double()
    assert caplog.text == ""


def test_strict_lottery_refuses_to_guess():
    lot = Lottery(strict=True)
    with pytest.raises(LotteryNotInitializedError):
        lot.next_gaussian()
    lot.set_generator(StandardRNG(5))
    lot.next_gaussian()


def test_information_contains_seed():
    assert "424242" in StandardRNG(424242).information()
    assert "MT19937" in MersenneRNG(1).information()


def test_concurrent_draws_are_all_delivered():
    lot = Lottery(StandardRNG(8))
    results = []
    lock = threading.Lock()

    def worker():
        local = [lot.next_int(1000) for _ in range(250)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    reference = Lottery(StandardRNG(8))
    expected = [reference.next_int(1000) for _ in range(2000)]
    assert sorted(results) == sorted(expected)
