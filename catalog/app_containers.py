from dependency_injector import containers, providers
from catalog.core.settings import Settings, settings
from catalog.v1_0.v1_containers import APIContainer


class ApplicationContainer(containers.DeclarativeContainer):
    config = providers.Configuration()

    api_container = providers.Container(
        APIContainer,
        config=config,
    )


def create_container(app_settings: Settings = settings) -> ApplicationContainer:
    container = ApplicationContainer()
    container.config.from_dict(
        {
            "pagination": {
                "default_size": app_settings.PAGINATION_SIZE_DEFAULT,
                "max_size": app_settings.PAGINATION_SIZE_MAX,
            }
        }
    )
    return container
