import random

from pokemon_rpg.constants import MAX_MOVES
from pokemon_rpg.formulas import calculate_all_stats, get_exp_for_level
from pokemon_rpg.models.models import EventType, Nature
from pokemon_rpg.services.pokemon_factory import PokemonFactory


def test_ivs_in_range_and_evs_zero(pokemon_factory, species_repository):
    for species in species_repository.get_all():
        for level in (1, 5, 50, 100):
            pokemon = pokemon_factory.create_pokemon(species, level)
            assert all(isinstance(iv, int) and 0 <= iv <= 31 for iv in pokemon.ivs.values())
            assert len(pokemon.ivs) == 6
            assert set(pokemon.evs.values()) == {0}


def test_creation_defaults(pokemon_factory, species_repository):
    species = species_repository.get_by_id(1)
    pokemon = pokemon_factory.create_pokemon(species, 10)
    assert pokemon.stats == calculate_all_stats(species["base_stats"], pokemon.ivs, pokemon.evs, 10, pokemon.nature)
    assert pokemon.current_hp == pokemon.stats["hp"]
    assert pokemon.friendship == 70
    assert pokemon.status is None
    assert pokemon.nickname == "Bulbasaur"
    assert pokemon.exp == get_exp_for_level("medium_slow", 10)
    assert pokemon.ability == "overgrow"
    assert isinstance(pokemon.nature, Nature)


def test_moves_prefer_highest_learnset_levels(pokemon_factory, species_repository, move_repository):
    pokemon = pokemon_factory.create_pokemon(species_repository.get_by_id(1), 25)
    assert [move.move_id for move in pokemon.moves] == ["razor_leaf", "vine_whip", "leech_seed", "growl"]
    for move in pokemon.moves:
        assert move.pp == move.max_pp == move_repository.get_by_id(move.move_id)["pp"]


def test_moves_never_exceed_four(pokemon_factory, species_repository):
    for species in species_repository.get_all():
        pokemon = pokemon_factory.create_pokemon(species, 100)
        assert 1 <= len(pokemon.moves) <= MAX_MOVES


def test_same_level_moves_keep_learnset_order(pokemon_factory, species_repository):
    pokemon = pokemon_factory.create_pokemon(species_repository.get_by_id(2), 5)
    assert [move.move_id for move in pokemon.moves] == ["tackle", "growl"]


def test_unregistered_moves_are_never_assigned(pokemon_factory, species_repository):
    species = dict(species_repository.get_by_id(4))
    species["learnset"] = [{"level": 1, "move_id": "scratch"}, {"level": 3, "move_id": "not_a_real_move"}]
    pokemon = pokemon_factory.create_pokemon(species, 5)
    assert [move.move_id for move in pokemon.moves] == ["scratch"]


def test_empty_learnset_falls_back_to_tackle(pokemon_factory, species_repository):
    species = dict(species_repository.get_by_id(4))
    species["learnset"] = []
    pokemon = pokemon_factory.create_pokemon(species, 5)
    assert [move.move_id for move in pokemon.moves] == ["tackle"]


def test_ability_is_none_without_a_pool(pokemon_factory, species_repository):
    species = dict(species_repository.get_by_id(4))
    del species["abilities"]
    assert pokemon_factory.create_pokemon(species, 5).ability is None


def test_ability_drawn_from_pool(pokemon_factory, species_repository):
    species = species_repository.get_by_id(74)
    abilities = {pokemon_factory.create_pokemon(species, 5).ability for _ in range(40)}
    assert abilities == {"rock_head", "sturdy"}


def test_shiny_chance_is_configurable(move_repository, species_repository):
    species = species_repository.get_by_id(25)
    always = PokemonFactory(move_repository, rng=random.Random(1), shiny_chance=1.0)
    never = PokemonFactory(move_repository, rng=random.Random(1), shiny_chance=0.0)
    assert always.create_pokemon(species, 5).is_shiny
    assert not never.create_pokemon(species, 5).is_shiny


def test_uids_are_unique(pokemon_factory, species_repository):
    species = species_repository.get_by_id(16)
    uids = {pokemon_factory.create_pokemon(species, 3).uid for _ in range(50)}
    assert len(uids) == 50


def test_same_seed_gives_same_creature(move_repository, species_repository):
    species = species_repository.get_by_id(7)
    first = PokemonFactory(move_repository, rng=random.Random(7)).create_pokemon(species, 12)
    second = PokemonFactory(move_repository, rng=random.Random(7)).create_pokemon(species, 12)
    assert first.ivs == second.ivs
    assert first.nature == second.nature
    assert first.stats == second.stats


def test_out_of_range_level_is_clamped(pokemon_factory, species_repository):
    species = species_repository.get_by_id(16)
    assert pokemon_factory.create_pokemon(species, 0).level == 1
    assert pokemon_factory.create_pokemon(species, 150).level == 100


def test_creation_is_published(pokemon_factory, species_repository, event_manager):
    received = []
    event_manager.subscribe(EventType.POKEMON_CREATED, received.append)
    pokemon = pokemon_factory.create_pokemon(species_repository.get_by_id(25), 5)
    assert received == [{"pokemon": pokemon}]
