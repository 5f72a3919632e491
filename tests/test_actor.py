import threading

import pytest

import linkstack


def test_pipeline(local):
    """ Three actors, each owning one state, chained by the control sequence
        of the message that starts the pipeline.
    """

    visited = list()

    first = linkstack.Actor(transport=local)
    second = linkstack.Actor(transport=local)
    third = linkstack.Actor(transport=local)

    @first.on(10)
    def greet(state):
        visited.append(10)
        name = state.pop()
        state.push('hello ' + name)

    @second.on(12)
    def shout(state):
        visited.append(12)
        state.push(state.pop().upper())

    results = list()

    @third.on(11)
    def collect(state):
        visited.append(11)
        results.append(state.items)

    first.start('10+12+11|world|untouched')
    delivered = local.run_pending()

    assert delivered == 3
    assert visited == [10, 12, 11]
    assert results == [['HELLO WORLD', 'untouched']]


def test_handler_extends_pipeline(local):

    visited = list()
    actor = linkstack.Actor(transport=local)

    @actor.on(1)
    def one(state):
        visited.append((1, state.channel))
        state.append_tail(3)

    @actor.on(2)
    def two(state):
        visited.append((2, state.channel))

    @actor.on(3)
    def three(state):
        visited.append((3, state.channel))

    actor.start('1+2|')
    local.run_pending()

    assert visited == [(1, 1), (2, 2), (3, 3)]


def test_handler_can_stop_pipeline(local):

    visited = list()
    actor = linkstack.Actor(transport=local)

    @actor.on(1)
    def one(state):
        visited.append(1)
        state.next = 0

    @actor.on(2)
    def two(state):
        visited.append(2)

    actor.start('1+2|')
    local.run_pending()

    assert visited == [1]


def test_handler_failure_stalls(local):

    visited = list()
    actor = linkstack.Actor(transport=local)

    @actor.on(1)
    def one(state):
        raise RuntimeError('broken handler')

    @actor.on(2)
    def two(state):
        visited.append(2)

    actor.start('1+2|')
    assert local.run_pending() == 1
    assert visited == []


def test_token_passes_through(local):

    tokens = list()
    actor = linkstack.Actor(transport=local)

    def capture(slot, payload, token):
        tokens.append(token)

    actor.add_handler(1, lambda state: None)
    local.listen(2, capture)

    actor.start('1+2|', token='abc-123')
    local.run_pending()

    assert tokens == ['abc-123']


def test_unaddressed_message_is_dropped(local):

    actor = linkstack.Actor(transport=local)
    actor.start('99|nobody home')

    assert local.run_pending() == 1


def test_registry_names(local):

    registry = linkstack.Registry({'greet': 10, 'collect': 11})
    actor = linkstack.Actor(transport=local, registry=registry)

    results = list()

    @actor.on('greet')
    def greet(state):
        state.push('hi')

    @actor.on('collect')
    def collect(state):
        results.append(state.pop())

    assert set(actor.handlers) == set((10, 11))

    actor.start('10+11|')
    local.run_pending()

    assert results == ['hi']

    with pytest.raises(KeyError):
        actor.add_handler('unknown', print)


def test_slot_conflicts(local):

    actor = linkstack.Actor(transport=local)
    other = linkstack.Actor(transport=local)

    actor.add_handler(5, print)

    with pytest.raises(ValueError):
        actor.add_handler(5, print)

    with pytest.raises(ValueError):
        other.add_handler(5, print)

    with pytest.raises(ValueError):
        actor.add_handler(0, print)

    with pytest.raises(ValueError):
        actor.add_handler('named', print)

    actor.remove_handler(5)
    other.add_handler(5, print)


def test_channel_listener(local):
    """ A channel message keeps its routing head; the listener forwards it
        to the state handler named by that head.
    """

    results = list()
    actor = linkstack.Actor(transport=local)
    actor.listen_channel(500)

    @actor.on(7)
    def seven(state):
        results.append((state.channel, state.pop()))

    local.send('*', 500, '7|from afar')
    local.run_pending()

    assert results == [(7, 'from afar')]


def test_close(local):

    actor = linkstack.Actor(transport=local)
    actor.add_handler(1, print)
    actor.listen_channel(2)

    actor.close()

    assert actor.handlers == {}
    assert not local.listening(1)
    assert not local.listening(2)


def test_background_delivery(local):

    done = threading.Event()
    actor = linkstack.Actor(transport=local)

    @actor.on(1)
    def one(state):
        state.push('seen')

    @actor.on(2)
    def two(state):
        if state.pop() == 'seen':
            done.set()

    local.start()
    actor.start('1+2|')

    assert done.wait(5)
    local.stop()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
