from __future__ import annotations

import threading

import pytest

from lib_log_hub.application.channels import Channel, ShutdownSignal
from lib_log_hub.domain.errors import ChannelClosedError
from tests.support import wait_until


@pytest.mark.parametrize("capacity", [0, -1, 1.5, True, None])
def test_channel_rejects_non_positive_capacity(capacity: object) -> None:
    with pytest.raises(ValueError, match="positive integer"):
        Channel(capacity)  # type: ignore[arg-type]


def test_channel_is_fifo() -> None:
    channel: Channel[int] = Channel(5)
    for item in (1, 2, 3):
        channel.put(item)
    assert [channel.receive(), channel.receive(), channel.poll()] == [1, 2, 3]
    assert channel.poll() is None
    assert channel.empty()


def test_offer_refuses_when_full_and_counts_rejections() -> None:
    channel: Channel[str] = Channel(1)
    assert channel.offer("a") is True
    assert channel.offer("b") is False
    assert channel.rejected == 1
    assert len(channel) == 1


def test_put_times_out_when_full() -> None:
    channel: Channel[str] = Channel(1)
    channel.put("a")
    assert channel.put("b", timeout=0.05) is False
    assert channel.poll() == "a"


def test_put_blocks_until_a_consumer_makes_room() -> None:
    channel: Channel[str] = Channel(1)
    channel.put("first")
    finished = threading.Event()

    def producer() -> None:
        channel.put("second")
        finished.set()

    thread = threading.Thread(target=producer)
    thread.start()
    assert not finished.wait(0.1)
    assert channel.receive() == "first"
    assert finished.wait(2.0)
    thread.join(2.0)
    assert channel.poll() == "second"


def test_seal_wakes_blocked_producer_with_closed_error() -> None:
    channel: Channel[str] = Channel(1)
    channel.put("first")
    raised: list[BaseException] = []

    def producer() -> None:
        try:
            channel.put("second")
        except ChannelClosedError as exc:
            raised.append(exc)

    thread = threading.Thread(target=producer)
    thread.start()
    assert not wait_until(lambda: bool(raised), timeout=0.1)
    channel.seal()
    thread.join(2.0)
    assert len(raised) == 1
    with pytest.raises(ChannelClosedError):
        channel.put("third")


def test_sealed_channel_stops_receive_but_keeps_items_for_poll() -> None:
    channel: Channel[str] = Channel(3)
    channel.put("a")
    channel.put("b")
    channel.seal()
    assert channel.sealed
    assert channel.receive() is None
    assert [channel.poll(), channel.poll(), channel.poll()] == ["a", "b", None]


def test_seal_wakes_blocked_receiver() -> None:
    channel: Channel[str] = Channel(1)
    results: list[object] = []
    thread = threading.Thread(target=lambda: results.append(channel.receive()))
    thread.start()
    assert not wait_until(lambda: bool(results), timeout=0.1)
    channel.seal()
    thread.join(2.0)
    assert results == [None]


def test_close_discards_items() -> None:
    channel: Channel[str] = Channel(2)
    channel.put("a")
    channel.close()
    assert channel.closed
    assert channel.poll() is None


def test_shutdown_signal_waits_for_acknowledgement() -> None:
    channel: Channel[str] = Channel(1)
    signal = ShutdownSignal(channel)

    def loop() -> None:
        while channel.receive() is not None:
            pass
        signal.acknowledge()

    thread = threading.Thread(target=loop)
    thread.start()
    assert signal.send(timeout=2.0) is True
    assert signal.is_set()
    assert signal.acknowledged
    assert channel.sealed
    thread.join(2.0)


def test_shutdown_signal_reports_missing_acknowledgement() -> None:
    signal = ShutdownSignal(Channel(1))
    assert signal.send(timeout=0.05) is False
    signal.close()
    with pytest.raises(ChannelClosedError):
        signal.send(timeout=0.05)
