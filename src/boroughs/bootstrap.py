import logging

from boroughs.application.mappers.save_mapper import session_from_payload, session_to_payload
from boroughs.application.services.character_creation_service import CharacterCreationService
from boroughs.application.services.event_bus import EventBus
from boroughs.application.services.turn_engine import TurnEngine
from boroughs.application.session import GameSession
from boroughs.config import GameConfig
from boroughs.domain.errors import SaveNotFoundError
from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.models.character import Character
from boroughs.domain.models.world import World
from boroughs.domain.repositories import SaveRepository
from boroughs.domain.services.random_source import RandomSource
from boroughs.infrastructure.db.sql_save_repo import SqlSaveRepository
from boroughs.infrastructure.inmemory.save_repo import InMemorySaveRepository
from boroughs.infrastructure.keyword_classifier import KeywordIntentClassifier
from boroughs.infrastructure.static_data import load_catalogs


logger = logging.getLogger(__name__)


def create_save_repository(config: GameConfig) -> SaveRepository:
    if not config.save_url:
        return InMemorySaveRepository()
    return SqlSaveRepository.from_url(config.save_url)


def create_creation_service(config: GameConfig, catalogs: Catalogs) -> CharacterCreationService:
    return CharacterCreationService(catalogs, inventory_limit=config.inventory_limit)


def start_session(config: GameConfig, catalogs: Catalogs, character: Character, world: World) -> GameSession:
    character.tuning = config.tuning
    character.update_derived_stats()
    session = GameSession.from_roster(character, world, RandomSource(config.seed), catalogs, EventBus())
    logger.info("Session started for %s in %s", character.name, world.active_district)
    return session


def create_engine_for(session: GameSession) -> TurnEngine:
    return TurnEngine(session, KeywordIntentClassifier(session.world.districts))


def save_session(repo: SaveRepository, session: GameSession, slot: str) -> None:
    repo.save(slot, session_to_payload(session))


def load_session(repo: SaveRepository, config: GameConfig, catalogs: Catalogs, slot: str) -> GameSession:
    payload = repo.load(slot)
    if payload is None:
        raise SaveNotFoundError(f"No save in slot {slot!r}")
    session = session_from_payload(
        payload,
        catalogs=catalogs,
        rng=RandomSource(config.seed),
        inventory_limit=config.inventory_limit,
    )
    session.character.tuning = config.tuning
    session.character.update_derived_stats()
    return session


def create_catalogs(config: GameConfig) -> Catalogs:
    return load_catalogs(config.data_dir)
