"""Tests for the service container."""

from api.dependencies import (
    ServiceContainer,
    get_container,
    get_order_service,
    get_session_manager,
    get_store,
    reset_container,
    set_container,
)
from shared.config import Settings
from shared.storage import MemoryStorage
from modules.store.interfaces import IStore


class TestServiceContainer:
    def test_services_are_singletons(self, container):
        assert container.store is container.store
        assert container.session is container.session
        assert container.orders is container.orders

    def test_store_and_session_share_storage(self, container, profile):
        assert isinstance(container.storage, MemoryStorage)
        container.session.set_auth(profile, "t")
        assert container.storage.get("auth_session") is not None

    def test_login_uses_shared_instances(self, container):
        login = container.login
        assert login._session is container.session
        assert login._store is container.store

    def test_reset_creates_fresh_services(self, container):
        store = container.store
        container.reset()
        assert container.store is not store

    def test_file_backend_uses_data_dir(self, tmp_path):
        container = ServiceContainer(Settings(_env_file=None, data_dir=tmp_path))
        assert container.store.get_all_users() == []
        assert container.storage.directory == tmp_path


class TestContainerSingleton:
    def test_get_container_is_cached(self):
        assert get_container() is get_container()

    def test_set_and_reset(self, settings):
        container = ServiceContainer(settings)
        set_container(container)
        assert get_container() is container
        reset_container()
        assert get_container() is not container

    def test_dependency_functions(self, container):
        assert isinstance(get_store(), IStore)
        assert get_store() is container.store
        assert get_session_manager() is container.session
        assert get_order_service() is container.orders
