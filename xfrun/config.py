from delnone import delnone
from func_prototypes import typed, returned

EAGER = 'eager'
LAZY = 'lazy'
STREAMING = 'streaming'
MODES = (EAGER, LAZY, STREAMING)

DEFAULTS = {
    'mode': EAGER,
    'channel_capacity': 1,
    'timeout': None,
}


@returned(bool)
@typed(str)
def is_mode(mode):
    return mode in MODES


def check_capacity(capacity):
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValueError("channel_capacity must be an integer, got %r" % (capacity,))
    if capacity < 1:
        raise ValueError("channel_capacity must be positive, got %d" % capacity)
    return capacity


def check_timeout(timeout):
    if timeout is None:
        return None
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError("timeout must be a number of seconds, got %r" % (timeout,))
    if timeout <= 0:
        raise ValueError("timeout must be positive, got %r" % (timeout,))
    return timeout


def options(mode=None, channel_capacity=None, timeout=None):
    """
    Builds driver options from whatever was set, falling back to DEFAULTS.
    channel_capacity and timeout only mean something to the streaming driver,
    asking for them with another mode is an error.
    """
    given = delnone(dict(mode=mode, channel_capacity=channel_capacity, timeout=timeout))
    opts = dict(DEFAULTS)
    opts.update(given)
    if not isinstance(opts['mode'], str) or not is_mode(opts['mode']):
        raise ValueError("mode must be one of %s, got %r" % (", ".join(MODES), opts['mode']))
    if opts['mode'] != STREAMING:
        streaming_only = [k for k in ('channel_capacity', 'timeout') if k in given]
        if streaming_only:
            raise ValueError("%s only applies to mode %s" % (", ".join(streaming_only), STREAMING))
    check_capacity(opts['channel_capacity'])
    check_timeout(opts['timeout'])
    return opts
