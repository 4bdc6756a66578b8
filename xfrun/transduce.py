from collections import deque
from xfrun.reducer import Checked, Terminated, arrayOf, reducer
from xfrun.config import options, EAGER, LAZY
from xfrun.channel import stream_transduce

_unset = object()


def reduceWith(rf, seed, iterable):
    """
    reduceWith folds iterable into seed with an already built reducer rf,
    stopping as soon as a step terminates. Think foldl from Haskell.
    complete is called once on the way out, either way.
    """
    accumulation = seed
    for value in iterable:
        r = rf.step(accumulation, value)
        if isinstance(r, Terminated):
            accumulation = r.value
            break
        accumulation = r.value
    return rf.complete(accumulation)


def transduce(xform, rf, coll, init=_unset):
    """
    Eager driver.
    xform is a transducer, rf the base reducer, coll any iterable.
    The seed is rf.init() unless init is given.
    """
    xrf = xform(Checked(rf))
    seed = xrf.init() if init is _unset else init
    return reduceWith(xrf, seed, coll)


def _buffer_step(buf, val):
    buf.append(val)
    return buf


_buffer = reducer(_buffer_step, deque)


def xiter(xform, coll):
    """
    Lazy driver. Yields what xform sends to its reducer, pulling from coll
    only as far as needed to produce the next item.
    """
    xrf = xform(Checked(_buffer))
    buf = xrf.init()
    for x in coll:
        r = xrf.step(buf, x)
        while buf:
            yield buf.popleft()
        if isinstance(r, Terminated):
            break
    xrf.complete(buf)
    while buf:
        yield buf.popleft()


class Eduction:
    """
    An iterable view of coll through xform. Each iteration starts a fresh
    reduction, so stateful transducers start over.
    """

    def __init__(self, xform, coll):
        self.xform = xform
        self.coll = coll

    def __iter__(self):
        return xiter(self.xform, self.coll)

    def reduce(self, rf, init=_unset):
        return transduce(self.xform, rf, self.coll, init)


def run(xform, coll, rf=None, mode=None, channel_capacity=None, timeout=None):
    """
    Runs xform over coll with the driver selected by mode.
    eager and streaming return the completed result of rf (arrayOf by default),
    lazy returns an iterator of the transformed elements.
    """
    opts = options(mode, channel_capacity, timeout)
    if opts['mode'] == LAZY:
        if rf is not None:
            raise ValueError("mode %s produces elements, it does not take a reducer" % LAZY)
        return xiter(xform, coll)
    rf = arrayOf if rf is None else rf
    if opts['mode'] == EAGER:
        return transduce(xform, rf, coll)
    return stream_transduce(xform, rf, coll,
                            capacity=opts['channel_capacity'],
                            timeout=opts['timeout'])
