from xfrun.reducer import \
    Checked,        \
    Continue,       \
    ProtocolError,  \
    Reducer,        \
    StepResult,     \
    Terminated,     \
    arrayOf,        \
    countOf,        \
    ensure_reduced, \
    firstOf,        \
    is_reduced,     \
    joinedWith,     \
    lastOf,         \
    meanOf,         \
    reducer,        \
    setOf,          \
    sumOf,          \
    unwrap_reduced
from xfrun.transducers import \
    Transducer,    \
    cat,           \
    dedupe,        \
    distinct,      \
    dropping,      \
    droppingWhile, \
    filtering,     \
    identity,      \
    interposing,   \
    keeping,       \
    mapcat,        \
    mapping,       \
    partitionAll,  \
    partitionBy,   \
    removing,      \
    replacing,     \
    scanning,      \
    taking,        \
    takingNth,     \
    takingWhile,   \
    tapping
from xfrun.compose import compose
from xfrun.combinators import juxt, preStep, postComplete, fuse
from xfrun.channel import Channel, ChannelClosed, StreamTimeout, from_iterable, stream_transduce
from xfrun.transduce import Eduction, reduceWith, run, transduce, xiter
