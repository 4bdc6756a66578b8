from typing import TypeVar, Callable, Generic

T = TypeVar("T")
U = TypeVar("U")


class ProtocolError(AssertionError):
    """Raised when a reducer is driven in a way its contract forbids."""


class StepResult(Generic[T]):
    """
    Result of a single step. Either Continue(acc) or Terminated(acc).
    Drivers look at the type, reducers build one of the two subclasses.
    """
    __slots__ = ('value',)

    def __init__(self, value: T):
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self), self.value))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class Continue(StepResult[T]):
    __slots__ = ()

    def __new__(cls, value=None):
        # A step result is never downgraded; Terminated stays Terminated.
        if isinstance(value, StepResult):
            return value
        return super().__new__(cls)

    def __init__(self, value: T):
        if not isinstance(value, StepResult):
            self.value = value


class Terminated(StepResult[T]):
    __slots__ = ()

    def __new__(cls, value=None):
        if isinstance(value, Terminated):
            return value
        return super().__new__(cls)

    def __init__(self, value: T):
        if isinstance(value, Terminated):
            return
        self.value = unwrap_reduced(value)


def is_reduced(x):
    return isinstance(x, Terminated)


def ensure_reduced(x):
    """Normalize x into a Terminated. Idempotent."""
    return Terminated(x)


def unwrap_reduced(x):
    """Returns the accumulator under any depth of step results."""
    while isinstance(x, StepResult):
        x = x.value
    return x


class Reducer(Generic[T, U]):
    """
    A reducing function: init() -> acc, step(acc, input) -> StepResult,
    complete(acc) -> acc.
    """

    def init(self) -> T:
        raise ProtocolError("%s has no initial value, pass a seed" % type(self).__name__)

    def step(self, result: T, input: U) -> StepResult[T]:
        raise NotImplementedError()

    def complete(self, result: T) -> T:
        return result


def _no_init():
    return None


class FnReducer(Reducer[T, U]):
    """Reducer built out of plain functions, see reducer()."""

    def __init__(self, step_fn: Callable[[T, U], T], init_fn=None, complete_fn=None):
        self.step_fn = step_fn
        self.init_fn = init_fn
        self.complete_fn = complete_fn

    def init(self):
        if self.init_fn is None:
            return super().init()
        return self.init_fn()

    def step(self, result, input):
        return Continue(self.step_fn(result, input))

    def complete(self, result):
        if self.complete_fn is None:
            return result
        return self.complete_fn(result)

    def __repr__(self):
        return "reducer(%s)" % getattr(self.step_fn, '__name__', self.step_fn)


def reducer(step, init=None, complete=None):
    """
    Wraps plain functions into a Reducer.
    step is (b -> a -> b), and may return a StepResult to stop early.
    init is () -> b. Without it the caller has to provide a seed.
    complete is (b -> b).
    """
    return FnReducer(step, init, complete)


class Checked(Reducer[T, U]):
    """
    Guards a reducer against being stepped after it terminated, or being
    completed twice. Drivers wrap the base reducer with it.
    """

    def __init__(self, rf: Reducer[T, U]):
        self.rf = rf
        self.terminated = False
        self.completed = False

    def init(self):
        return self.rf.init()

    def step(self, result, input):
        if self.terminated:
            raise ProtocolError("step called on %r after it terminated" % (self.rf,))
        if self.completed:
            raise ProtocolError("step called on %r after complete" % (self.rf,))
        r = self.rf.step(result, input)
        if isinstance(r, Terminated):
            self.terminated = True
        elif not isinstance(r, Continue):
            raise ProtocolError("%r step returned %r, expected a StepResult" % (self.rf, r))
        return r

    def complete(self, result):
        if self.completed:
            raise ProtocolError("complete called twice on %r" % (self.rf,))
        self.completed = True
        return self.rf.complete(result)


arrayOf = reducer(lambda acc, val: acc.append(val) or acc, list)
arrayOf.__doc__ = \
"""
Collects into a list. Appends in place instead of reallocating on every loop
iteration; init hands out a fresh list per reduction.
"""

sumOf = reducer(lambda acc, val: acc + val, int)
sumOf.__doc__ = """Reducer which computes a sum"""

countOf = reducer(lambda acc, val: acc + 1, int)
countOf.__doc__ = """Reducer which counts its inputs"""

setOf = reducer(lambda acc, val: acc.add(val) or acc, set)

lastOf = reducer(lambda acc, val: val, _no_init)

firstOf = reducer(lambda acc, val: Terminated(val), _no_init)
firstOf.__doc__ = """Keeps the first input and stops the reduction."""


def joinedWith(seperator):
    """Joins the str() of every element with seperator. None means nothing joined yet."""
    def joint(acc, val):
        if acc is None:
            return str(val)
        else:
            return "%s%s%s" % (acc, seperator, val)
    def joined(acc):
        return '' if acc is None else acc
    return reducer(joint, lambda: None, joined)


def _mean_step(acc, val):
    (total, count) = acc
    return (total + val, count + 1)


def _mean_complete(acc):
    (total, count) = acc
    if count == 0:
        return None
    return total / count


meanOf = reducer(_mean_step, lambda: (0, 0), _mean_complete)
meanOf.__doc__ = """Sums and counts while stepping, divides on complete."""
