from copy import copy
from typing import TypeVar, Callable, Generic
from xfrun.reducer import Reducer, Continue, Terminated, is_reduced, unwrap_reduced

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")


class _Undefined:
    pass


class Transducer(Reducer[T, U]):
    """
    A reducer wrapping an inner reducer rf. All three operations pass
    through; subclasses override the ones they change.
    """

    def __init__(self, rf: Reducer[T, U]):
        self.rf = rf

    def init(self):
        return self.rf.init()

    def step(self, result: T, input: U):
        return self.rf.step(result, input)

    def complete(self, result: T):
        return self.rf.complete(result)


def identity(rf):
    return Transducer(rf)


class Mapping(Transducer[T, B], Generic[T, A, B]):

    def __init__(self, f: Callable[[A], B], rf: Reducer[T, B]):
        super().__init__(rf)
        self.f = f

    def step(self, result: T, input: A):
        return self.rf.step(result, self.f(input))


def mapping(f: Callable[[A], B]):
    def mapped(rf: Reducer[T, B]):
        return Mapping(f, rf)
    return mapped


class Filtering(Transducer):

    def __init__(self, pred, rf):
        super().__init__(rf)
        self.pred = pred

    def step(self, result, input):
        if self.pred(input):
            return self.rf.step(result, input)
        return Continue(result)


def filtering(pred: Callable[[U], bool]):
    def filtered(rf: Reducer[T, U]):
        return Filtering(pred, rf)
    return filtered


def removing(pred: Callable[[U], bool]):
    return filtering(lambda x: not pred(x))


class Keeping(Transducer):
    """Maps with f, dropping the inputs where f returned None."""

    def __init__(self, f, rf):
        super().__init__(rf)
        self.f = f

    def step(self, result, input):
        v = self.f(input)
        if v is None:
            return Continue(result)
        return self.rf.step(result, v)


def keeping(f):
    def kept(rf):
        return Keeping(f, rf)
    return kept


class Cat(Transducer):
    """Each input is an iterable, steps its items one by one."""

    def step(self, result, input):
        for item in input:
            r = self.rf.step(result, item)
            if is_reduced(r):
                return r
            result = r.value
        return Continue(result)


def cat(rf):
    return Cat(rf)


def mapcat(f):
    def mapcatted(rf):
        return Mapping(f, Cat(rf))
    return mapcatted


class Tapping(Transducer):

    def __init__(self, fn, rf):
        super().__init__(rf)
        self.fn = fn

    def step(self, result, input):
        self.fn(input)
        return self.rf.step(result, input)


def tapping(fn):
    """Calls fn on every input for its side effect, forwards the input."""
    def tapped(rf):
        return Tapping(fn, rf)
    return tapped


def replacing(smap):
    return mapping(lambda x: smap.get(x, x))


def _check_count(n, name, minimum=0):
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError("%s needs an integer, got %r" % (name, n))
    if n < minimum:
        raise ValueError("%s needs a count of at least %d, got %d" % (name, minimum, n))


class Taking(Transducer):

    def __init__(self, n, rf):
        super().__init__(rf)
        self.remaining = n

    def step(self, result, input):
        if self.remaining <= 0:
            return Terminated(result)
        self.remaining -= 1
        r = self.rf.step(result, input)
        if self.remaining == 0:
            return Terminated(r)
        return r


def taking(n: int):
    _check_count(n, "taking")
    def taker(rf: Reducer[T, U]):
        return Taking(n, rf)
    return taker


class TakingWhile(Transducer):

    def __init__(self, pred, rf):
        super().__init__(rf)
        self.pred = pred

    def step(self, result, input):
        if self.pred(input):
            return self.rf.step(result, input)
        return Terminated(result)


def takingWhile(pred):
    def taker(rf):
        return TakingWhile(pred, rf)
    return taker


class TakingNth(Transducer):

    def __init__(self, n, rf):
        super().__init__(rf)
        self.n = n
        self.seen = -1

    def step(self, result, input):
        self.seen += 1
        if self.seen % self.n == 0:
            return self.rf.step(result, input)
        return Continue(result)


def takingNth(n: int):
    _check_count(n, "takingNth", 1)
    def taker(rf):
        return TakingNth(n, rf)
    return taker


class Dropping(Transducer):

    def __init__(self, n, rf):
        super().__init__(rf)
        self.remaining = n

    def step(self, result, input):
        if self.remaining > 0:
            self.remaining -= 1
            return Continue(result)
        return self.rf.step(result, input)


def dropping(n: int):
    _check_count(n, "dropping")
    def dropper(rf):
        return Dropping(n, rf)
    return dropper


class DroppingWhile(Transducer):

    def __init__(self, pred, rf):
        super().__init__(rf)
        self.pred = pred
        self.dropping = True

    def step(self, result, input):
        if self.dropping and self.pred(input):
            return Continue(result)
        self.dropping = False
        return self.rf.step(result, input)


def droppingWhile(pred):
    def dropper(rf):
        return DroppingWhile(pred, rf)
    return dropper


class Distinct(Transducer):

    def __init__(self, rf):
        super().__init__(rf)
        self.seen = set()

    def step(self, result, input):
        if input in self.seen:
            return Continue(result)
        self.seen.add(input)
        return self.rf.step(result, input)

    def complete(self, result):
        self.seen.clear()
        return self.rf.complete(result)


def distinct(rf):
    return Distinct(rf)


class Dedupe(Transducer):

    def __init__(self, rf):
        super().__init__(rf)
        self.prev = _Undefined

    def step(self, result, input):
        if self.prev is not _Undefined and input == self.prev:
            return Continue(result)
        self.prev = input
        return self.rf.step(result, input)


def dedupe(rf):
    return Dedupe(rf)


class _Buffering(Transducer):
    """Base for transducers holding a pending partition."""

    def __init__(self, rf):
        super().__init__(rf)
        self.buffer = []

    def flush(self, result):
        buf = tuple(self.buffer)
        self.buffer.clear()
        return self.rf.step(result, buf)

    def complete(self, result):
        if self.buffer:
            result = unwrap_reduced(self.flush(result))
        return self.rf.complete(result)


class PartitionAll(_Buffering):

    def __init__(self, n, rf):
        super().__init__(rf)
        self.n = n

    def step(self, result, input):
        self.buffer.append(input)
        if len(self.buffer) < self.n:
            return Continue(result)
        return self.flush(result)


def partitionAll(n: int):
    _check_count(n, "partitionAll", 1)
    def partitioner(rf):
        return PartitionAll(n, rf)
    return partitioner


class PartitionBy(_Buffering):

    def __init__(self, f, rf):
        super().__init__(rf)
        self.f = f
        self.key = _Undefined

    def step(self, result, input):
        key = self.f(input)
        if self.key is _Undefined or key == self.key:
            self.key = key
            self.buffer.append(input)
            return Continue(result)
        r = self.flush(result)
        # Once downstream is done there is nothing left to buffer for.
        if not is_reduced(r):
            self.key = key
            self.buffer.append(input)
        return r


def partitionBy(f):
    def partitioner(rf):
        return PartitionBy(f, rf)
    return partitioner


class Scanning(Transducer):
    """Forwards the running accumulation of reducer `over`, seed first."""

    def __init__(self, over, seed, rf):
        super().__init__(rf)
        self.over = over
        self.state = _Undefined
        self.seed = seed

    def _start(self, result):
        self.state = self.seed
        return self.rf.step(result, self.seed)

    def step(self, result, input):
        if self.state is _Undefined:
            r = self._start(result)
            if is_reduced(r):
                return r
            result = r.value
        # over may step in place, each emitted state is its own object.
        s = self.over.step(copy(self.state), input)
        self.state = s.value
        r = self.rf.step(result, self.state)
        if is_reduced(s):
            return Terminated(r)
        return r

    def complete(self, result):
        if self.state is _Undefined:
            result = unwrap_reduced(self._start(result))
        return self.rf.complete(result)


def scanning(over: Reducer, seed=_Undefined):
    def scanner(rf):
        s = over.init() if seed is _Undefined else seed
        return Scanning(over, s, rf)
    return scanner


class Interposing(Transducer):

    def __init__(self, sep, rf):
        super().__init__(rf)
        self.sep = sep
        self.started = False

    def step(self, result, input):
        if self.started:
            r = self.rf.step(result, self.sep)
            if is_reduced(r):
                return r
            result = r.value
        self.started = True
        return self.rf.step(result, input)


def interposing(sep):
    def interposer(rf):
        return Interposing(sep, rf)
    return interposer
