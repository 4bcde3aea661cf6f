"""Tests for worldsim.events — named-signal event bus."""

from worldsim.events import EventBus


def _collector(log, tag):
    def handler(signal_name, data):
        log.append((tag, signal_name, data))
    return handler


class TestEventBus:
    def test_add_and_trigger(self):
        bus = EventBus()
        log = []
        bus.add('yearPassed', 'rules', _collector(log, 'rules'))
        bus.trigger('yearPassed')
        assert log == [('rules', 'yearPassed', {})]

    def test_payload_passed_as_dict(self):
        bus = EventBus()
        log = []
        bus.add('seedAdded', 'rules', _collector(log, 'rules'))
        bus.trigger('seedAdded', seed='abel')
        assert log == [('rules', 'seedAdded', {'seed': 'abel'})]

    def test_unknown_signal_is_noop(self):
        bus = EventBus()
        bus.trigger('nothingRegistered', value=1)  # Should not raise

    def test_handlers_called_in_registration_order(self):
        bus = EventBus()
        log = []
        for tag in ('a', 'b', 'c'):
            bus.add('tick', tag, _collector(log, tag))
        bus.trigger('tick')
        assert [entry[0] for entry in log] == ['a', 'b', 'c']

    def test_same_namespace_overwrites_slot(self):
        bus = EventBus()
        log = []
        bus.add('tick', 'a', _collector(log, 'a-old'))
        bus.add('tick', 'b', _collector(log, 'b'))
        bus.add('tick', 'a', _collector(log, 'a-new'))
        bus.trigger('tick')
        # Overwritten slot keeps its original position
        assert [entry[0] for entry in log] == ['a-new', 'b']

    def test_namespaces_are_per_signal(self):
        bus = EventBus()
        log = []
        bus.add('yearPassed', 'rules', _collector(log, 'year'))
        bus.add('seedAdded', 'rules', _collector(log, 'seed'))
        bus.trigger('yearPassed')
        assert [entry[0] for entry in log] == ['year']

    def test_remove(self):
        bus = EventBus()
        log = []
        bus.add('tick', 'a', _collector(log, 'a'))
        bus.remove('tick', 'a')
        bus.trigger('tick')
        assert log == []
        assert not bus.has('tick', 'a')

    def test_remove_missing_is_noop(self):
        bus = EventBus()
        bus.remove('tick', 'a')
        bus.add('tick', 'a', _collector([], 'a'))
        bus.remove('tick', 'b')
        assert bus.has('tick', 'a')

    def test_has(self):
        bus = EventBus()
        assert not bus.has('tick', 'a')
        bus.add('tick', 'a', _collector([], 'a'))
        assert bus.has('tick', 'a')
        assert not bus.has('other', 'a')

    def test_handler_may_remove_itself(self):
        bus = EventBus()
        log = []

        def once(signal_name, data):
            log.append('once')
            bus.remove('tick', 'once')

        bus.add('tick', 'once', once)
        bus.add('tick', 'always', _collector(log, 'always'))
        bus.trigger('tick')
        bus.trigger('tick')
        assert [e if isinstance(e, str) else e[0] for e in log] == [
            'once', 'always', 'always',
        ]

    def test_handler_added_during_dispatch_waits(self):
        bus = EventBus()
        log = []

        def spawner(signal_name, data):
            log.append('spawner')
            bus.add('tick', 'late', _collector(log, 'late'))

        bus.add('tick', 'spawner', spawner)
        bus.trigger('tick')
        assert log == ['spawner']
        bus.trigger('tick')
        assert log[1:] == ['spawner', ('late', 'tick', {})]
