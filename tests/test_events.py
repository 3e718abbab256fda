from pokemon_rpg.events import EventManager
from pokemon_rpg.models.models import EventType


def test_publish_reaches_subscribers_in_order():
    event_manager = EventManager()
    calls = []
    event_manager.subscribe(EventType.GAME_SAVED, lambda data: calls.append(("first", data)))
    event_manager.subscribe(EventType.GAME_SAVED, lambda data: calls.append(("second", data)))
    event_manager.publish(EventType.GAME_SAVED, version="red-blue")
    assert calls == [("first", {"version": "red-blue"}), ("second", {"version": "red-blue"})]


def test_subscribing_twice_registers_once():
    event_manager = EventManager()
    calls = []
    event_manager.subscribe(EventType.ITEM_USED, calls.append)
    event_manager.subscribe(EventType.ITEM_USED, calls.append)
    event_manager.publish(EventType.ITEM_USED)
    assert event_manager.subscriber_count(EventType.ITEM_USED) == 1
    assert calls == [{}]


def test_unsubscribe():
    event_manager = EventManager()
    calls = []
    event_manager.subscribe(EventType.BATTLE_ENDED, calls.append)
    event_manager.unsubscribe(EventType.BATTLE_ENDED, calls.append)
    event_manager.unsubscribe(EventType.BATTLE_ENDED, calls.append)
    event_manager.publish(EventType.BATTLE_ENDED)
    assert calls == []


def test_events_are_isolated_by_type():
    event_manager = EventManager()
    calls = []
    event_manager.subscribe(EventType.POKEMON_CAUGHT, calls.append)
    event_manager.publish(EventType.POKEMON_FAINTED, pokemon=None)
    assert calls == []
    assert event_manager.subscriber_count(EventType.POKEMON_FAINTED) == 0
