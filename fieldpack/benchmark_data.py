"""Random sample records used to measure serialization speed."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from enum import IntEnum

_CHARSET = string.digits + string.ascii_uppercase + string.ascii_lowercase

_LOG_COUNT = 10000
_ITEM_VEC_SIZE = 15
_RECIPE_COUNT = 30
_DISPLAYED_COUNT = 10


class GameType(IntEnum):
    SURVIVAL = 0
    CREATIVE = 1
    ADVENTURE = 2
    SPECTATOR = 3


@dataclass
class Address:
    x0: int
    x1: int
    x2: int
    x3: int


@dataclass
class Log:
    address: Address
    identity: str
    userid: str
    date: str
    request: str
    code: int
    size: int


@dataclass
class Logs:
    logs: list[Log] = field(default_factory=list)


@dataclass
class Item:
    count: int
    slot: int
    id: str


@dataclass
class Abilities:
    walk_speed: float
    fly_speed: float
    may_fly: bool
    flying: bool
    invulnerable: bool
    may_build: bool
    instabuild: bool


@dataclass
class Vector3d:
    x: float
    y: float
    z: float


@dataclass
class Vector2f:
    x: float
    y: float


@dataclass
class Uuid:
    x0: int
    x1: int
    x2: int
    x3: int


@dataclass
class Entity:
    id: str
    pos: Vector3d
    motion: Vector3d
    rotation: Vector2f
    fall_distance: float
    fire: int
    air: int
    on_ground: bool
    no_gravity: bool
    invulnerable: bool
    portal_cooldown: int
    uuid: Uuid
    custom_name: str
    custom_name_visible: bool
    silent: bool
    glowing: bool


@dataclass
class RecipeBook:
    recipes: list[str] = field(default_factory=list)
    to_be_displayed: list[str] = field(default_factory=list)
    is_filtering_craftable: bool = False
    is_gui_open: bool = False
    is_furnace_filtering_craftable: bool = False
    is_furnace_gui_open: bool = False
    is_blasting_furnace_filtering_craftable: bool = False
    is_blasting_furnace_gui_open: bool = False
    is_smoker_filtering_craftable: bool = False
    is_smoker_gui_open: bool = False


@dataclass
class Vehicle:
    uuid: Uuid
    entity: Entity


@dataclass
class Player:
    game_type: GameType
    previous_game_type: GameType
    score: int
    dimension: str
    selected_item_slot: int
    selected_item: Item
    spawn_dimension: str
    spawn_x: int
    spawn_y: int
    spawn_z: int
    spawn_forced: bool
    sleep_timer: int
    food_exhaustion_level: float
    food_saturation_level: float
    food_tick_timer: int
    xp_level: int
    xp_p: float
    xp_total: int
    xp_seed: int
    inventory: list[Item]
    ender_items: list[Item]
    abilities: Abilities
    entered_nether_position: Vector3d
    root_vehicle: Vehicle
    shoulder_entity_left: Entity
    shoulder_entity_right: Entity
    seen_credits: bool
    recipe_book: RecipeBook


@dataclass
class Players:
    players: list[Player] = field(default_factory=list)


def _source(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def generate_string(length: int, rng: random.Random | None = None) -> str:
    """A random string of ASCII letters and digits."""
    rng = _source(rng)
    return "".join(rng.choice(_CHARSET) for _ in range(length))


def generate_address(rng: random.Random | None = None) -> Address:
    rng = _source(rng)
    return Address(*(rng.randint(0, 20000) for _ in range(4)))


def generate_log(rng: random.Random | None = None) -> Log:
    rng = _source(rng)
    return Log(
        address=generate_address(rng),
        identity=generate_string(12, rng),
        userid=generate_string(8, rng),
        date=generate_string(16, rng),
        request=generate_string(32, rng),
        code=rng.randint(0, 20000),
        size=rng.randint(0, 20000),
    )


def generate_logs(rng: random.Random | None = None) -> Logs:
    """Ten thousand random log records."""
    rng = _source(rng)
    return Logs([generate_log(rng) for _ in range(_LOG_COUNT)])


def generate_game_type(rng: random.Random | None = None) -> GameType:
    """Survival for one draw in four, creative otherwise."""
    rng = _source(rng)
    return GameType.SURVIVAL if rng.randint(0, 3) == 0 else GameType.CREATIVE


def generate_item(rng: random.Random | None = None) -> Item:
    rng = _source(rng)
    return Item(
        count=rng.randint(0, 100),
        slot=rng.randint(0, 20),
        id=generate_string(32, rng),
    )


def _generate_item_vec(rng: random.Random) -> list[Item]:
    return [generate_item(rng) for _ in range(_ITEM_VEC_SIZE)]


def _generate_abilities(rng: random.Random) -> Abilities:
    walk_speed = rng.uniform(0, 100)
    fly_speed = rng.uniform(0, 100)
    may_fly, flying, invulnerable, may_build, instabuild = (
        rng.randint(0, 60) % divisor == 0 for divisor in (2, 3, 5, 7, 13)
    )
    return Abilities(walk_speed, fly_speed, may_fly, flying, invulnerable, may_build, instabuild)


def _generate_vector3d(rng: random.Random) -> Vector3d:
    return Vector3d(*(rng.uniform(-100, 100) for _ in range(3)))


def _generate_vector2f(rng: random.Random) -> Vector2f:
    return Vector2f(*(rng.uniform(-100, 100) for _ in range(2)))


def _generate_uuid(rng: random.Random) -> Uuid:
    return Uuid(*(rng.randint(0, 10000) for _ in range(4)))


def generate_entity(rng: random.Random | None = None) -> Entity:
    rng = _source(rng)
    return Entity(
        id=generate_string(32, rng),
        pos=_generate_vector3d(rng),
        motion=_generate_vector3d(rng),
        rotation=_generate_vector2f(rng),
        fall_distance=rng.uniform(-100, 100),
        fire=rng.randint(0, 10000),
        air=rng.randint(0, 10000),
        on_ground=rng.randint(0, 10000) % 14 == 0,
        no_gravity=rng.randint(0, 10000) % 5 == 0,
        invulnerable=rng.randint(0, 10000) % 9 == 0,
        portal_cooldown=rng.randint(0, 200),
        uuid=_generate_uuid(rng),
        custom_name=generate_string(16, rng),
        custom_name_visible=rng.randint(0, 10000) % 3 == 0,
        silent=rng.randint(0, 10000) % 5 == 0,
        glowing=rng.randint(0, 10000) % 7 == 0,
    )


def generate_recipe_book(rng: random.Random | None = None) -> RecipeBook:
    rng = _source(rng)
    recipes = [generate_string(12, rng) for _ in range(_RECIPE_COUNT)]
    to_be_displayed = [generate_string(12, rng) for _ in range(_DISPLAYED_COUNT)]
    flags = [rng.randint(0, 50) % 2 == 0 for _ in range(8)]
    return RecipeBook(recipes, to_be_displayed, *flags)


def _generate_vehicle(rng: random.Random) -> Vehicle:
    return Vehicle(_generate_uuid(rng), generate_entity(rng))


def generate_player(rng: random.Random | None = None) -> Player:
    rng = _source(rng)
    return Player(
        game_type=generate_game_type(rng),
        previous_game_type=generate_game_type(rng),
        score=rng.randint(-10000, 10000),
        dimension=generate_string(16, rng),
        selected_item_slot=rng.randint(0, 100000),
        selected_item=generate_item(rng),
        spawn_dimension=generate_string(16, rng),
        spawn_x=rng.randint(-10000, 10000),
        spawn_y=rng.randint(-10000, 10000),
        spawn_z=rng.randint(-10000, 10000),
        spawn_forced=rng.randint(0, 100000) % 2 == 0,
        sleep_timer=rng.randint(0, 100000),
        food_exhaustion_level=rng.uniform(-100, 100),
        food_saturation_level=rng.uniform(-100, 100),
        food_tick_timer=rng.randint(0, 100000),
        xp_level=rng.randint(0, 100000),
        xp_p=rng.uniform(-100, 100),
        xp_total=rng.randint(-2000, 2000),
        xp_seed=rng.randint(-2000, 2000),
        inventory=_generate_item_vec(rng),
        ender_items=_generate_item_vec(rng),
        abilities=_generate_abilities(rng),
        entered_nether_position=_generate_vector3d(rng),
        root_vehicle=_generate_vehicle(rng),
        shoulder_entity_left=generate_entity(rng),
        shoulder_entity_right=generate_entity(rng),
        seen_credits=rng.randint(0, 100000) % 2 == 0,
        recipe_book=generate_recipe_book(rng),
    )