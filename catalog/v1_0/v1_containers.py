from dependency_injector import containers, providers
from catalog.v1_0.entities import PaginationPolicy
from catalog.v1_0.repositories import UserRepository
from catalog.v1_0.services import UserService


class APIContainer(containers.DeclarativeContainer):
    config = providers.Configuration()

    pagination_policy = providers.Singleton(
        PaginationPolicy,
        default_size=config.pagination.default_size.as_int(),
        max_size=config.pagination.max_size.as_int(),
    )
    user_repository = providers.Singleton(UserRepository)

    user_service = providers.Singleton(
        UserService,
        user_repository=user_repository,
        pagination_policy=pagination_policy,
    )
