import logging

from pokemon_rpg.constants import DEFAULT_GROWTH_RATE, DEFAULT_HEAL_AMOUNT, DEFAULT_REVIVE_FRACTION, MAX_LEVEL
from pokemon_rpg.events import EventManager
from pokemon_rpg.formulas import get_exp_for_level, recalculate_stats
from pokemon_rpg.models.models import BagCategory, BagItem, EventType, Pokemon, ShopResult, UseItemResult
from pokemon_rpg.repositories import ItemRepository, SpeciesRepository

LOGGER = logging.getLogger(__name__)

NO_EFFECT_MESSAGE = "It won't have any effect."
NOT_USABLE_MESSAGE = "This item can't be used here."


class InventoryService:
    def __init__(
        self,
        item_repository: ItemRepository,
        species_repository: SpeciesRepository,
        event_manager: EventManager | None = None,
    ) -> None:
        self._event_manager = event_manager
        self._item_repository = item_repository
        self._species_repository = species_repository

    def _publish(self, event_type: EventType, **data: object) -> None:
        if self._event_manager is not None:
            self._event_manager.publish(event_type, **data)

    @staticmethod
    def add_item(bag: list[BagItem], item_id: str, quantity: int = 1) -> list[BagItem]:
        updated = [BagItem(entry.item_id, entry.quantity) for entry in bag]
        for entry in updated:
            if entry.item_id == item_id:
                entry.quantity += quantity
                break
        else:
            updated.append(BagItem(item_id, quantity))
        return [entry for entry in updated if entry.quantity > 0]

    @staticmethod
    def remove_item(bag: list[BagItem], item_id: str, quantity: int = 1) -> list[BagItem]:
        updated = []
        for entry in bag:
            remaining = entry.quantity - quantity if entry.item_id == item_id else entry.quantity
            if remaining > 0:
                updated.append(BagItem(entry.item_id, remaining))
        return updated

    @staticmethod
    def get_item_count(bag: list[BagItem], item_id: str) -> int:
        return next((entry.quantity for entry in bag if entry.item_id == item_id), 0)

    def has_item(self, bag: list[BagItem], item_id: str) -> bool:
        return self.get_item_count(bag, item_id) > 0

    def get_items_by_category(self, bag: list[BagItem], category: BagCategory) -> list[BagItem]:
        items = []
        for entry in bag:
            item_data = self._item_repository.get_by_id(entry.item_id)
            if item_data is not None and item_data["category"] == category.value:
                items.append(entry)
        return items

    def use_item(  # noqa: C901, PLR0911, PLR0912
        self,
        bag: list[BagItem],
        item_id: str,
        target: Pokemon,
    ) -> UseItemResult:
        item_data = self._item_repository.get_by_id(item_id)
        if item_data is None:
            return UseItemResult(False, "Unknown item!", bag)
        if not self.has_item(bag, item_id):
            return UseItemResult(False, "No items left!", bag)
        effect = item_data.get("effect")
        if not effect:
            return UseItemResult(False, NOT_USABLE_MESSAGE, bag)
        name = target.display_name
        effect_type = effect.get("type")
        max_hp = target.stats["hp"]

        if effect_type == "heal_hp":
            cures_status = bool(effect.get("cures_status")) and target.status is not None
            if target.current_hp >= max_hp and not cures_status:
                return UseItemResult(False, NO_EFFECT_MESSAGE, bag)
            if target.is_fainted:
                return UseItemResult(False, "This Pokemon has fainted!", bag)
            heal = int(effect.get("value", DEFAULT_HEAL_AMOUNT))
            target.current_hp = min(max_hp, target.current_hp + heal)
            if effect.get("cures_status"):
                target.status = None
            message = f"{name} recovered HP!"
        elif effect_type == "heal_status":
            required = effect.get("status")
            if target.status is None:
                return UseItemResult(False, NO_EFFECT_MESSAGE, bag)
            if required and required != "all" and target.status.value != required:
                return UseItemResult(False, NO_EFFECT_MESSAGE, bag)
            target.status = None
            message = f"{name} was cured!"
        elif effect_type == "revive":
            if not target.is_fainted:
                return UseItemResult(False, "This Pokemon hasn't fainted!", bag)
            fraction = effect.get("value", DEFAULT_REVIVE_FRACTION)
            target.current_hp = max(1, int(max_hp * fraction))
            target.status = None
            message = f"{name} was revived!"
        elif effect_type == "heal_pp":
            if all(move.pp >= move.max_pp for move in target.moves):
                return UseItemResult(False, NO_EFFECT_MESSAGE, bag)
            restore = effect.get("value")
            for move in target.moves:
                move.pp = move.max_pp if restore is None else min(move.max_pp, move.pp + int(restore))
            message = "PP was restored!"
        elif effect_type == "rare_candy":
            if target.level >= MAX_LEVEL:
                return UseItemResult(False, NO_EFFECT_MESSAGE, bag)
            target.level += 1
            species = self._species_repository.get_by_id(target.species_id)
            if species is not None:
                growth_rate = species.get("growth_rate", DEFAULT_GROWTH_RATE)
                target.exp = max(target.exp, get_exp_for_level(growth_rate, target.level))
                recalculate_stats(target, species)
            else:
                LOGGER.warning("No species data for %s, stats not recalculated", target)
            message = f"{name} grew to Lv. {target.level}!"
        else:
            return UseItemResult(False, NOT_USABLE_MESSAGE, bag)

        LOGGER.info("Used %s on %s", item_id, target)
        self._publish(EventType.ITEM_USED, item_id=item_id, pokemon=target)
        return UseItemResult(True, message, self.remove_item(bag, item_id))

    @staticmethod
    def can_afford(money: int, price: int, quantity: int = 1) -> bool:
        return money >= price * quantity

    def buy_item(self, bag: list[BagItem], money: int, item_id: str, quantity: int = 1) -> ShopResult:
        item_data = self._item_repository.get_by_id(item_id)
        if item_data is None:
            return ShopResult(False, "Unknown item!", bag, money)
        if quantity <= 0:
            return ShopResult(False, "Invalid quantity!", bag, money)
        if not self.can_afford(money, item_data["price"], quantity):
            return ShopResult(False, "You don't have enough money.", bag, money)
        cost = item_data["price"] * quantity
        LOGGER.info("Bought %d x %s for %d", quantity, item_id, cost)
        self._publish(EventType.ITEM_BOUGHT, item_id=item_id, quantity=quantity, cost=cost)
        return ShopResult(
            True,
            f"Bought {quantity} {item_data['name']}!",
            self.add_item(bag, item_id, quantity),
            money - cost,
        )

    def sell_item(self, bag: list[BagItem], money: int, item_id: str, quantity: int = 1) -> ShopResult:
        item_data = self._item_repository.get_by_id(item_id)
        if item_data is None:
            return ShopResult(False, "Unknown item!", bag, money)
        if item_data["is_key_item"]:
            return ShopResult(False, "You can't sell that!", bag, money)
        if quantity <= 0 or self.get_item_count(bag, item_id) < quantity:
            return ShopResult(False, "You don't have enough of that item.", bag, money)
        value = item_data["price"] // 2 * quantity
        LOGGER.info("Sold %d x %s for %d", quantity, item_id, value)
        self._publish(EventType.ITEM_SOLD, item_id=item_id, quantity=quantity, value=value)
        return ShopResult(
            True,
            f"Sold {quantity} {item_data['name']}!",
            self.remove_item(bag, item_id, quantity),
            money + value,
        )
