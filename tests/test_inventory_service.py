import pytest

from pokemon_rpg.formulas import get_exp_for_level
from pokemon_rpg.models.models import BagCategory, BagItem, EventType, StatusCondition
from pokemon_rpg.services.inventory_service import InventoryService


@pytest.fixture
def bag():
    return [BagItem("potion", 2), BagItem("poke_ball", 5), BagItem("rare_candy", 1), BagItem("bicycle", 1)]


def test_add_item_merges_and_appends(bag):
    updated = InventoryService.add_item(bag, "potion", 3)
    assert InventoryService.get_item_count(updated, "potion") == 5
    assert InventoryService.get_item_count(bag, "potion") == 2
    updated = InventoryService.add_item(updated, "antidote")
    assert updated[-1] == BagItem("antidote", 1)


def test_remove_item_drops_empty_entries(bag):
    updated = InventoryService.remove_item(bag, "potion", 2)
    assert InventoryService.get_item_count(updated, "potion") == 0
    assert all(entry.item_id != "potion" for entry in updated)
    assert InventoryService.remove_item(bag, "missing") == bag
    assert all(entry.quantity > 0 for entry in InventoryService.remove_item(bag, "poke_ball", 10))


def test_item_queries(inventory_service, bag):
    assert inventory_service.has_item(bag, "poke_ball")
    assert not inventory_service.has_item(bag, "antidote")
    assert inventory_service.get_items_by_category(bag, BagCategory.MEDICINE) == [BagItem("potion", 2)]
    assert inventory_service.get_items_by_category(bag, BagCategory.KEY_ITEMS) == [BagItem("bicycle", 1)]
    assert inventory_service.get_items_by_category(bag, BagCategory.TMS) == []


def test_potion_heals_up_to_max(inventory_service, make_pokemon, bag):
    pokemon = make_pokemon(25, 30)
    pokemon.current_hp = pokemon.stats["hp"] - 5
    result = inventory_service.use_item(bag, "potion", pokemon)
    assert result.success
    assert result.message == "Pikachu recovered HP!"
    assert pokemon.current_hp == pokemon.stats["hp"]
    assert InventoryService.get_item_count(result.bag, "potion") == 1


def test_potion_at_full_hp_has_no_effect(inventory_service, make_pokemon, bag):
    result = inventory_service.use_item(bag, "potion", make_pokemon(25, 30))
    assert not result.success
    assert result.message == "It won't have any effect."
    assert result.bag is bag


def test_full_restore_cures_status_at_full_hp(inventory_service, make_pokemon):
    pokemon = make_pokemon(25, 30, status=StatusCondition.PARALYSIS)
    result = inventory_service.use_item([BagItem("full_restore", 1)], "full_restore", pokemon)
    assert result.success
    assert pokemon.status is None
    assert result.bag == []


def test_healing_refuses_fainted_targets(inventory_service, make_pokemon):
    result = inventory_service.use_item([BagItem("potion", 1)], "potion", make_pokemon(25, 30, current_hp=0))
    assert not result.success
    assert result.message == "This Pokemon has fainted!"


def test_status_heals_must_match(inventory_service, make_pokemon):
    pokemon = make_pokemon(25, 30, status=StatusCondition.POISON)
    bag = [BagItem("antidote", 1), BagItem("burn_heal", 1), BagItem("full_heal", 1)]
    assert not inventory_service.use_item(bag, "burn_heal", pokemon).success
    result = inventory_service.use_item(bag, "antidote", pokemon)
    assert result.success
    assert result.message == "Pikachu was cured!"
    assert pokemon.status is None
    assert not inventory_service.use_item(result.bag, "full_heal", pokemon).success

    pokemon.status = StatusCondition.SLEEP
    assert inventory_service.use_item(result.bag, "full_heal", pokemon).success


def test_revive(inventory_service, make_pokemon):
    bag = [BagItem("revive", 1), BagItem("max_revive", 1)]
    healthy = make_pokemon(25, 30)
    assert inventory_service.use_item(bag, "revive", healthy).message == "This Pokemon hasn't fainted!"

    fainted = make_pokemon(25, 30, current_hp=0, status=StatusCondition.BURN)
    result = inventory_service.use_item(bag, "revive", fainted)
    assert result.success
    assert fainted.current_hp == fainted.stats["hp"] // 2
    assert fainted.status is None

    fainted.current_hp = 0
    inventory_service.use_item(result.bag, "max_revive", fainted)
    assert fainted.current_hp == fainted.stats["hp"]


def test_ether_restores_pp(inventory_service, make_pokemon):
    pokemon = make_pokemon(25, 30, ["thunder_shock", "growl"])
    bag = [BagItem("ether", 1), BagItem("max_ether", 1)]
    assert not inventory_service.use_item(bag, "ether", pokemon).success

    pokemon.moves[0].pp = 0
    pokemon.moves[1].pp = 35
    result = inventory_service.use_item(bag, "ether", pokemon)
    assert result.success
    assert pokemon.moves[0].pp == 10
    assert pokemon.moves[1].pp == pokemon.moves[1].max_pp

    inventory_service.use_item(result.bag, "max_ether", pokemon)
    assert pokemon.moves[0].pp == pokemon.moves[0].max_pp


def test_rare_candy_raises_level(inventory_service, make_pokemon, bag):
    pokemon = make_pokemon(25, 30)
    old_hp = pokemon.stats["hp"]
    result = inventory_service.use_item(bag, "rare_candy", pokemon)
    assert result.success
    assert result.message == "Pikachu grew to Lv. 31!"
    assert pokemon.level == 31
    assert pokemon.exp == get_exp_for_level("medium_fast", 31)
    assert pokemon.stats["hp"] >= old_hp
    assert not inventory_service.has_item(result.bag, "rare_candy")


def test_rare_candy_at_max_level(inventory_service, make_pokemon, bag):
    assert not inventory_service.use_item(bag, "rare_candy", make_pokemon(25, 100)).success


def test_items_that_cannot_be_used(inventory_service, make_pokemon, bag):
    pokemon = make_pokemon(25, 30)
    assert inventory_service.use_item(bag, "nonexistent", pokemon).message == "Unknown item!"
    assert inventory_service.use_item(bag, "antidote", pokemon).message == "No items left!"
    assert inventory_service.use_item(bag, "bicycle", pokemon).message == "This item can't be used here."
    assert inventory_service.use_item(bag, "poke_ball", pokemon).message == "This item can't be used here."


def test_item_use_is_published(inventory_service, make_pokemon, event_manager, bag):
    received = []
    event_manager.subscribe(EventType.ITEM_USED, received.append)
    pokemon = make_pokemon(25, 30, current_hp=1)
    inventory_service.use_item(bag, "potion", pokemon)
    assert received == [{"item_id": "potion", "pokemon": pokemon}]


def test_can_afford():
    assert InventoryService.can_afford(600, 300, 2)
    assert not InventoryService.can_afford(599, 300, 2)


def test_buy_item(inventory_service, bag):
    result = inventory_service.buy_item(bag, 1000, "potion", 3)
    assert result.success
    assert result.message == "Bought 3 Potion!"
    assert result.money == 100
    assert InventoryService.get_item_count(result.bag, "potion") == 5


def test_buy_item_failures(inventory_service, bag):
    assert inventory_service.buy_item(bag, 299, "potion").message == "You don't have enough money."
    assert inventory_service.buy_item(bag, 1000, "potion", 0).message == "Invalid quantity!"
    failed = inventory_service.buy_item(bag, 1000, "nonexistent")
    assert not failed.success
    assert failed.money == 1000
    assert failed.bag is bag


def test_sell_item_pays_half_price(inventory_service, bag):
    result = inventory_service.sell_item(bag, 0, "poke_ball", 5)
    assert result.success
    assert result.message == "Sold 5 Poke Ball!"
    assert result.money == 500
    assert not inventory_service.has_item(result.bag, "poke_ball")


def test_sell_item_failures(inventory_service, bag):
    assert inventory_service.sell_item(bag, 0, "bicycle").message == "You can't sell that!"
    assert inventory_service.sell_item(bag, 0, "potion", 3).message == "You don't have enough of that item."
    assert inventory_service.sell_item(bag, 0, "potion", -1).message == "You don't have enough of that item."


def test_shop_events(inventory_service, event_manager, bag):
    bought = []
    sold = []
    event_manager.subscribe(EventType.ITEM_BOUGHT, bought.append)
    event_manager.subscribe(EventType.ITEM_SOLD, sold.append)
    inventory_service.buy_item(bag, 1000, "potion", 2)
    inventory_service.sell_item(bag, 0, "potion", 1)
    assert bought == [{"item_id": "potion", "quantity": 2, "cost": 600}]
    assert sold == [{"item_id": "potion", "quantity": 1, "value": 150}]
