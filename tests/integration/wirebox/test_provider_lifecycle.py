"""Integration tests for service provider registration and boot."""

import pytest

from sample_services.log import Log
from sample_services.mailer import Mailer
from sample_services.providers import (
    InvalidServiceProvider,
    LogServiceProvider,
    MailerServiceProvider,
    UserServiceProvider,
)
from sample_services.users import User
from wirebox import (
    ContainerError,
    DIContainer,
    InvalidProviderError,
    ProviderState,
    ServiceProvider,
)


class TestProviderLifecycle:
    """Test providers across the container."""

    def test_provider_supplies_definitions(self):
        """Test that definitions added in register are resolvable."""
        container = DIContainer()
        container.register_provider(MailerServiceProvider)

        assert MailerServiceProvider in container.providers
        assert isinstance(container.get(Mailer), Mailer)

    def test_provider_by_import_path(self):
        """Test registering a provider by import path."""
        container = DIContainer()
        container.register_provider("sample_services.providers.MailerServiceProvider")

        assert isinstance(container.get(Mailer), Mailer)

    def test_provider_boot_runs_once(self, capsys):
        """Test that boot output appears exactly once across several resolutions."""
        container = DIContainer()
        container.register_provider(UserServiceProvider)

        assert isinstance(container.get(User), User)
        container.get(User)
        container.get(Mailer)

        assert capsys.readouterr().out == 'The message (Hello "mohamed") was sent to : mohamed@example.com\n'

    def test_provider_setter_with_container_values(self, capsys):
        """Test a boot binding a setter from other definitions."""
        container = DIContainer()
        container.set("admin_name", "admin2")
        container.set("admin_email", "admin2@example.com")
        container.set(Mailer)
        container.register_provider(LogServiceProvider)

        assert isinstance(container.get(Log), Log)
        assert capsys.readouterr().out == 'The message (Alert to : "admin2") was sent to : admin2@example.com\n'

    def test_boot_sees_every_registration(self):
        """Test that boot can use definitions supplied by a later provider's register."""
        booted = []

        class ConsumerProvider(ServiceProvider):
            def register(self, container):
                pass

            def boot(self, container):
                booted.append(container.get("late_value"))

        class SupplierProvider(ServiceProvider):
            def register(self, container):
                container.set("late_value", 42)

            def boot(self, container):
                pass

        container = DIContainer()
        container.register_providers([ConsumerProvider, SupplierProvider])

        assert container.get("late_value") == 42
        assert booted == [42]

    def test_any_operation_triggers_providers(self):
        """Test that make, call and call_function also run the providers."""
        for trigger in (
            lambda c: c.make(Mailer),
            lambda c: c.call(Mailer, "send", {"email": "a@b.com", "body": "hi"}),
            lambda c: c.call_function(lambda: None),
        ):
            container = DIContainer()
            container.register_provider(MailerServiceProvider)

            trigger(container)

            assert container._providers.state == ProviderState.BOOTED

    def test_has_does_not_trigger_providers(self):
        """Test that has only reads the current definitions."""
        container = DIContainer()
        container.register_provider(MailerServiceProvider)

        assert not container.has(Mailer)
        assert container._providers.state == ProviderState.UNREGISTERED

    @pytest.mark.parametrize(
        "provider",
        [[], False, None, "", 123, object(), lambda: True, InvalidServiceProvider, Mailer],
    )
    def test_invalid_providers(self, provider):
        """Test that anything but a ServiceProvider subclass is rejected."""
        with pytest.raises(InvalidProviderError):
            DIContainer().register_provider(provider)

    def test_late_registration_fails(self):
        """Test that providers cannot be added after they have run."""
        container = DIContainer()
        container.register_provider(MailerServiceProvider)
        container.get(Mailer)

        with pytest.raises(ContainerError):
            container.register_provider(UserServiceProvider)

    def test_failed_provider_can_be_retried(self):
        """Test that a provider failing in register does not stop the others for good."""
        booted = []
        failures = []

        class ValueProvider(ServiceProvider):
            def register(self, container):
                container.set("x", 1)

            def boot(self, container):
                booted.append("value")

        class FlakyProvider(ServiceProvider):
            def register(self, container):
                if not failures:
                    failures.append("register")
                    raise RuntimeError("flaky register")
                container.set("y", 2)

            def boot(self, container):
                booted.append("flaky")

        container = DIContainer()
        container.register_providers([ValueProvider, FlakyProvider])

        with pytest.raises(RuntimeError, match="flaky register"):
            container.get("y")

        assert container.get("x") == 1
        assert container.get("y") == 2
        assert booted == ["value", "flaky"]
        assert container._providers.state == ProviderState.BOOTED
