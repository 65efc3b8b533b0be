"""
Dependency injection container using dependency-injector.
Wires the database handle and the health service/controller.
"""

from dependency_injector import containers, providers

from app.db.session import Database
from app.services.health_service import HealthService
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    database = providers.Singleton(
        Database,
        url=config.database_url,
        echo=config.db_echo,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
        database=database,
        started_at=config.started_at,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )
