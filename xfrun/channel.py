from collections import deque
from concurrent.futures import ThreadPoolExecutor
from threading import Condition
from time import monotonic
from xfrun.reducer import Checked, Terminated
from xfrun.config import check_capacity, check_timeout

_unset = object()


class _Closed:
    def __repr__(self):
        return "CLOSED"


CLOSED = _Closed()


class ChannelClosed(Exception):
    """Put on a channel after it was closed."""


class ChannelTimeout(TimeoutError):
    pass


class StreamTimeout(TimeoutError):
    """
    The streaming driver waited longer than its timeout for the producer.
    partial is the accumulator so far when the caller asked to keep it,
    None otherwise.
    """

    def __init__(self, timeout, partial=None):
        super().__init__("no element within %ss" % timeout)
        self.timeout = timeout
        self.partial = partial


class Channel:
    """
    Bounded FIFO between one producer thread and one consumer.
    put blocks while the channel is full, take blocks while it is empty and
    open. cancel() drops buffered values and makes every later put return
    False, so the producer knows to stop.
    """

    def __init__(self, capacity=1):
        self.capacity = check_capacity(capacity)
        self.buffer = deque()
        self.cond = Condition()
        self.closed = False
        self.cancelled = False

    def put(self, value):
        with self.cond:
            while len(self.buffer) >= self.capacity and not (self.cancelled or self.closed):
                self.cond.wait()
            if self.cancelled:
                return False
            if self.closed:
                raise ChannelClosed("put on closed channel")
            self.buffer.append(value)
            self.cond.notify_all()
            return True

    def take(self, timeout=None):
        """Next value, or CLOSED once the channel is closed and drained."""
        deadline = None if timeout is None else monotonic() + timeout
        with self.cond:
            while not self.buffer and not (self.closed or self.cancelled):
                if deadline is None:
                    self.cond.wait()
                else:
                    remaining = deadline - monotonic()
                    if remaining <= 0:
                        raise ChannelTimeout("take timed out after %ss" % timeout)
                    self.cond.wait(remaining)
            if self.buffer:
                value = self.buffer.popleft()
                self.cond.notify_all()
                return value
            return CLOSED

    def close(self):
        with self.cond:
            self.closed = True
            self.cond.notify_all()

    def cancel(self):
        with self.cond:
            self.cancelled = True
            self.buffer.clear()
            self.cond.notify_all()

    def __iter__(self):
        while True:
            value = self.take()
            if value is CLOSED:
                return
            yield value


def from_iterable(coll):
    """Push producer over an iterable. Stops pulling once emit refuses."""
    def produce(emit):
        for x in coll:
            if not emit(x):
                return
    return produce


def _pump(producer, chan):
    try:
        producer(chan.put)
    finally:
        chan.close()


def _drain(xrf, acc, chan, timeout, keep_partial):
    """Steps elements off chan. Returns (acc, terminated)."""
    while True:
        try:
            x = chan.take(timeout)
        except ChannelTimeout:
            raise StreamTimeout(timeout, acc if keep_partial else None)
        if x is CLOSED:
            return (acc, False)
        r = xrf.step(acc, x)
        acc = r.value
        if isinstance(r, Terminated):
            return (acc, True)


def stream_transduce(xform, rf, producer, capacity=1, timeout=None, keep_partial=False, init=_unset):
    """
    Streaming driver.
    producer is either a callable taking emit, where emit(x) returns False
    once the reduction wants no more input, or an iterable, which is pumped
    through from_iterable. The producer runs on its own thread and hands
    elements over through a Channel of the given capacity.
    Once the reduction terminates or fails the producer is cancelled and
    left to wind down on its own; it is only joined after end of stream.
    """
    check_capacity(capacity)
    check_timeout(timeout)
    if not callable(producer):
        producer = from_iterable(producer)
    chan = Channel(capacity)
    xrf = xform(Checked(rf))
    acc = xrf.init() if init is _unset else init
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="xfrun-producer")
    pumped = executor.submit(_pump, producer, chan)
    try:
        (acc, terminated) = _drain(xrf, acc, chan, timeout, keep_partial)
    except BaseException:
        chan.cancel()
        executor.shutdown(wait=False)
        raise
    if terminated:
        # Whatever the producer does past this point is not our input.
        chan.cancel()
        executor.shutdown(wait=False)
    else:
        executor.shutdown(wait=True)
        # Surfaces the producer's own failure, if it had one.
        pumped.result()
    return xrf.complete(acc)
