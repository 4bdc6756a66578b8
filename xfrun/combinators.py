from xfrun.reducer import Reducer, Continue, Terminated, unwrap_reduced


class Juxt(Reducer):
    """
    Runs several reducers side by side over the same inputs.
    The accumulator is a list with one slot per reducer. A reducer which
    terminates keeps its slot as a Terminated value and is not stepped again.
    The whole fan out terminates once every reducer has.
    """

    def __init__(self, rfs):
        self.rfs = tuple(rfs)

    def init(self):
        return [rf.init() for rf in self.rfs]

    def step(self, result, input):
        active = 0
        for (i, rf) in enumerate(self.rfs):
            acc = result[i]
            if isinstance(acc, Terminated):
                continue
            r = rf.step(acc, input)
            if isinstance(r, Terminated):
                result[i] = r
            else:
                result[i] = r.value
                active += 1
        if active == 0:
            return Terminated(result)
        return Continue(result)

    def complete(self, result):
        return tuple([rf.complete(unwrap_reduced(acc)) for (rf, acc) in zip(self.rfs, result)])


def juxt(*rfs):
    return Juxt(rfs)


class PreStep(Reducer):

    def __init__(self, rf, f):
        self.rf = rf
        self.f = f

    def init(self):
        return self.rf.init()

    def step(self, result, input):
        return self.rf.step(result, self.f(input))

    def complete(self, result):
        return self.rf.complete(result)


def preStep(rf, f):
    """rf, with f applied to each input before it is stepped."""
    return PreStep(rf, f)


class PostComplete(Reducer):

    def __init__(self, rf, f):
        self.rf = rf
        self.f = f

    def init(self):
        return self.rf.init()

    def step(self, result, input):
        return self.rf.step(result, input)

    def complete(self, result):
        return self.f(self.rf.complete(result))


def postComplete(rf, f):
    """rf, with f applied to the completed result."""
    return PostComplete(rf, f)


def fuse(named_rfs):
    """
    Fans out over the reducers in named_rfs and completes to a dict of
    name to result.
    """
    names = list(named_rfs.keys())
    def rename(results):
        return dict(zip(names, results))
    return postComplete(juxt(*named_rfs.values()), rename)
