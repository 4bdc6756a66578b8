import pytest
import time
from itertools import count
from threading import Event, Thread
from xfrun.channel import \
    CLOSED,           \
    Channel,          \
    ChannelClosed,    \
    ChannelTimeout,   \
    StreamTimeout,    \
    from_iterable,    \
    stream_transduce
from xfrun.compose import compose
from xfrun.reducer import arrayOf, sumOf
from xfrun.transduce import transduce
from xfrun.transducers import filtering, identity, mapping, partitionAll, taking

def inc(x):
    return x + 1

isOdd = lambda x: x % 2 == 1

def test_channel_put_take():
    chan = Channel(2)
    assert chan.put(1) is True
    assert chan.put(2) is True
    assert chan.take() == 1
    assert chan.take() == 2
    chan.close()
    assert chan.take() is CLOSED

def test_channel_drains_before_closed():
    chan = Channel(2)
    chan.put('a')
    chan.close()
    assert chan.take() == 'a'
    assert chan.take() is CLOSED

def test_channel_put_after_close():
    chan = Channel()
    chan.close()
    with pytest.raises(ChannelClosed):
        chan.put(1)

def test_channel_cancel():
    chan = Channel(2)
    chan.put(1)
    chan.cancel()
    assert chan.put(2) is False
    assert chan.take() is CLOSED

def test_channel_take_timeout():
    chan = Channel()
    with pytest.raises(ChannelTimeout):
        chan.take(0.01)
    assert issubclass(ChannelTimeout, TimeoutError)

def test_channel_capacity():
    for capacity in [0, -1, 1.5, None]:
        with pytest.raises(ValueError):
            Channel(capacity)

def test_channel_put_blocks_when_full():
    chan = Channel(1)
    second_put = Event()
    def producer():
        chan.put(1)
        chan.put(2)
        second_put.set()
    t = Thread(target=producer)
    t.start()
    assert not second_put.wait(0.05)
    assert chan.take() == 1
    assert second_put.wait(5)
    assert chan.take() == 2
    t.join()

def test_channel_cancel_unblocks_put():
    chan = Channel(1)
    results = []
    first_put = Event()
    def producer():
        results.append(chan.put(1))
        first_put.set()
        results.append(chan.put(2))
    t = Thread(target=producer)
    t.start()
    assert first_put.wait(5)
    chan.cancel()
    t.join(5)
    assert not t.is_alive()
    assert results == [True, False]

def test_channel_iteration():
    chan = Channel(3)
    def producer():
        for x in range(5):
            chan.put(x)
        chan.close()
    t = Thread(target=producer)
    t.start()
    assert list(chan) == [0, 1, 2, 3, 4]
    t.join()

def test_from_iterable_stops_when_refused(counting):
    producer = counting(range(10))
    emitted = []
    def emit(x):
        emitted.append(x)
        return len(emitted) < 3
    from_iterable(producer)(emit)
    assert emitted == [0, 1, 2]
    assert producer.pulled == 3

def test_stream_transduce():
    xform = compose(filtering(isOdd), mapping(inc))
    assert stream_transduce(xform, arrayOf, range(10)) == [2, 4, 6, 8, 10]
    assert stream_transduce(xform, sumOf, range(10), capacity=4) == 30

def test_stream_preserves_order():
    assert stream_transduce(identity, arrayOf, range(1000), capacity=3) == list(range(1000))

def test_stream_with_seed():
    assert stream_transduce(identity, sumOf, [1, 2], init=10) == 13

def test_stream_flushes():
    assert stream_transduce(partitionAll(2), arrayOf, range(5)) == [(0, 1), (2, 3), (4,)]

def test_stream_termination_cancels_producer(counting):
    for capacity in [1, 4]:
        producer = counting(count())
        assert stream_transduce(taking(3), arrayOf, producer, capacity=capacity) == [0, 1, 2]
        # Buffered in the channel, plus the one the producer held when cancelled.
        assert producer.pulled <= 3 + capacity + 1

def test_stream_push_producer():
    emitted = []
    def producer(emit):
        for x in range(100):
            emitted.append(x)
            if not emit(x):
                return
    assert stream_transduce(taking(5), arrayOf, producer) == [0, 1, 2, 3, 4]
    assert len(emitted) <= 5 + 1 + 1

def test_stream_complete_exactly_once(spy, recording):
    base = recording(arrayOf)
    stream_transduce(compose(spy, mapping(inc)), base, range(5))
    assert (spy.last.inits, spy.last.steps, spy.last.completes) == (1, 5, 1)
    assert (base.inits, base.completes) == (1, 1)
    base = recording(arrayOf)
    stream_transduce(compose(spy, taking(2)), base, count())
    assert (spy.last.inits, spy.last.steps, spy.last.completes) == (1, 2, 1)
    assert (base.inits, base.completes) == (1, 1)

def test_stream_producer_fault(recording):
    base = recording(arrayOf)
    def producer(emit):
        emit(1)
        emit(2)
        raise RuntimeError("disk on fire")
    with pytest.raises(RuntimeError):
        stream_transduce(identity, base, producer)
    assert base.steps == 2
    assert base.completes == 0

def test_stream_user_fault_releases_producer(recording):
    finished = Event()
    def producer(emit):
        try:
            for x in count():
                if not emit(x):
                    return
        finally:
            finished.set()
    base = recording(arrayOf)
    with pytest.raises(ZeroDivisionError):
        stream_transduce(mapping(lambda x: 1 / (x - 2)), base, producer)
    assert finished.wait(5)
    assert base.completes == 0

def test_stream_timeout():
    release = Event()
    def producer(emit):
        emit('a')
        release.wait(5)
    try:
        with pytest.raises(StreamTimeout) as e:
            stream_transduce(identity, arrayOf, producer, timeout=0.05)
        assert e.value.partial is None
        assert e.value.timeout == 0.05
        with pytest.raises(StreamTimeout) as e:
            stream_transduce(identity, arrayOf, producer, timeout=0.05, keep_partial=True)
        assert e.value.partial == ['a']
    finally:
        release.set()

def test_stream_timeout_is_distinct():
    assert issubclass(StreamTimeout, TimeoutError)
    assert not issubclass(StreamTimeout, ChannelClosed)

def test_stream_bad_options():
    with pytest.raises(ValueError):
        stream_transduce(identity, arrayOf, [1], capacity=0)
    with pytest.raises(ValueError):
        stream_transduce(identity, arrayOf, [1], timeout=-1)

def test_stream_termination_does_not_wait_on_producer():
    release = Event()
    def slow():
        yield 0
        yield 1
        yield 2
        release.wait(5)
        yield 3
    try:
        started = time.monotonic()
        assert stream_transduce(taking(3), arrayOf, slow()) == [0, 1, 2]
        assert time.monotonic() - started < 2
    finally:
        release.set()

def test_stream_producer_fault_past_termination():
    def flaky():
        yield 0
        yield 1
        yield 2
        raise RuntimeError("disk on fire")
    for capacity in [1, 4]:
        assert stream_transduce(taking(3), arrayOf, flaky(), capacity=capacity) == [0, 1, 2]
        assert transduce(taking(3), arrayOf, flaky()) == [0, 1, 2]
