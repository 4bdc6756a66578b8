import pytest
from xfrun.reducer import Reducer


class Counting:
    """Iterable which counts how many elements were pulled out of it."""

    def __init__(self, coll):
        self.coll = coll
        self.pulled = 0

    def __iter__(self):
        for x in self.coll:
            self.pulled += 1
            yield x


class Recording(Reducer):
    """Wraps a reducer, counting the calls made to it."""

    def __init__(self, rf):
        self.rf = rf
        self.inits = 0
        self.steps = 0
        self.completes = 0

    def init(self):
        self.inits += 1
        return self.rf.init()

    def step(self, result, input):
        self.steps += 1
        return self.rf.step(result, input)

    def complete(self, result):
        self.completes += 1
        return self.rf.complete(result)


class Spy:
    """
    Transducer which records what the driver calls on it.
    Put it first in a composition to see the driver's side of the protocol.
    """

    def __init__(self):
        self.recordings = []

    def __call__(self, rf):
        recording = Recording(rf)
        self.recordings.append(recording)
        return recording

    @property
    def last(self):
        return self.recordings[-1]


@pytest.fixture
def spy():
    return Spy()

@pytest.fixture
def counting():
    return Counting

@pytest.fixture
def recording():
    return Recording
