"""
ObservableValue tests.
"""

from codemaster.classroom import ObservableValue


class TestObservableValue:

    def test_initial_value(self):
        assert ObservableValue(3).value == 3

    def test_publish_updates_value(self):
        observable = ObservableValue(0)
        observable.publish(5)
        assert observable.value == 5

    def test_every_write_is_delivered(self):
        observable = ObservableValue({})
        seen = []
        observable.subscribe(seen.append)

        observable.publish({"L1": 20})
        observable.publish({"L1": 0})

        assert seen == [{"L1": 20}, {"L1": 0}]

    def test_equal_values_are_not_coalesced(self):
        observable = ObservableValue(0)
        seen = []
        observable.subscribe(seen.append)
        observable.publish(1)
        observable.publish(1)
        assert seen == [1, 1]

    def test_subscribers_called_in_order(self):
        observable = ObservableValue(0)
        calls = []
        observable.subscribe(lambda v: calls.append(("first", v)))
        observable.subscribe(lambda v: calls.append(("second", v)))
        observable.publish(1)
        assert calls == [("first", 1), ("second", 1)]

    def test_emit_current(self):
        observable = ObservableValue("start")
        seen = []
        observable.subscribe(seen.append, emit_current=True)
        assert seen == ["start"]

    def test_unsubscribe(self):
        observable = ObservableValue(0)
        seen = []
        unsubscribe = observable.subscribe(seen.append)
        observable.publish(1)
        unsubscribe()
        unsubscribe()
        observable.publish(2)
        assert seen == [1]
