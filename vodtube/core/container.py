"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the entire process (engine, clients, configs)
- Factory: New instance every time (services)

Usage:
    # In Celery
    from vodtube.core.container import get_container

    @shared_task
    def my_task():
        container = get_container()
        with container.reset_singletons():
            uploader = container.services.youtube_uploader()
            ...

    # In tests
    with container.infrastructure.redis_async_client.override(mock_redis):
        ...
"""

from dependency_injector import containers, providers
from redis.asyncio import Redis as AsyncRedis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vodtube.core.config import Config, get_config


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (databases, caches, external clients)."""

    global_config = providers.Dependency(instance_of=Config)
    configs = providers.DependenciesContainer()

    # ============================================
    # Redis
    # ============================================

    redis_async_client = providers.Singleton(
        AsyncRedis.from_url,
        url=global_config.provided.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        socket_keepalive=True,
    )

    # ============================================
    # Database
    # ============================================

    db_engine = providers.Singleton(
        create_async_engine,
        url=global_config.provided.database_url,
        echo=global_config.provided.database_echo,
        pool_pre_ping=True,
        pool_size=global_config.provided.database_pool_size,
        max_overflow=global_config.provided.database_max_overflow,
    )

    db_session_factory = providers.Singleton(
        async_sessionmaker,
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    # ============================================
    # YouTube
    # ============================================

    youtube_auth = providers.Singleton(
        "vodtube.infrastructure.youtube_auth.YouTubeAuthClient",
        db_session_factory=db_session_factory,
        client_id=global_config.provided.youtube_client_id,
        client_secret=global_config.provided.youtube_client_secret,
        token_uri=global_config.provided.youtube_token_uri,
    )

    youtube_api = providers.Singleton(
        "vodtube.infrastructure.youtube_api.YouTubeAPIClient",
        auth_client=youtube_auth,
        chunk_size=configs.youtube_upload_config.provided.youtube_api.chunk_size_bytes,
        watch_url_base=configs.youtube_upload_config.provided.youtube_api.watch_url_base,
    )


class ConfigContainer(containers.DeclarativeContainer):
    """Configuration models container.

    Provides typed Pydantic config models for services.
    Configs are Singleton by default - loaded once and reused.
    """

    youtube_upload_config = providers.Singleton(
        "vodtube.config.youtube_upload.YouTubeUploadPipelineConfig",
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services are Factory providers and receive infrastructure via injection.
    """

    infrastructure = providers.DependenciesContainer()
    configs = providers.DependenciesContainer()

    youtube_uploader = providers.Factory(
        "vodtube.services.uploader.youtube_uploader.YouTubeUploader",
        youtube_api=infrastructure.youtube_api,
        db_session_factory=infrastructure.db_session_factory,
        config=configs.youtube_upload_config.provided.youtube_api,
    )

    youtube_config_service = providers.Factory(
        "vodtube.services.uploader.config_service.YouTubeConfigService",
        db_session_factory=infrastructure.db_session_factory,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    configs = providers.Container(
        ConfigContainer,
    )

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
        configs=configs,
    )

    services = providers.Container(
        ServiceContainer,
        infrastructure=infrastructure,
        configs=configs,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


def get_container() -> ApplicationContainer:
    """Get the global container."""
    return container


__all__ = [
    "ApplicationContainer",
    "container",
    "create_container",
    "get_container",
]
