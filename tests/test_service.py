"""Tests for the installer service, registry and dependency cache."""

import pytest

from plugin_installer.errors import CyclicDependencyError
from plugin_installer.installer import (
    INSTALL,
    UNINSTALL,
    ApplicationContext,
    BaseInstaller,
    DependencyCache,
    InstallerRegistry,
)


class TestInstallerRegistry:
    def test_resolve_memoizes_instances(self, fake_installer_class):
        created = []

        def factory():
            created.append(1)
            return fake_installer_class("app.a")

        registry = InstallerRegistry({"app.a": factory})
        first = registry.resolve("app.a")

        assert first is registry.resolve("app.a")
        assert len(created) == 1

    def test_missing_installer_resolves_to_none(self):
        registry = InstallerRegistry()
        assert registry.resolve("app.z") is None
        assert registry.resolve("app.z") is None

    def test_duplicate_registration_raises(self, fake_installer_class):
        registry = InstallerRegistry()
        registry.register("app.a", lambda: fake_installer_class("app.a"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register("app.a", lambda: fake_installer_class("app.a"))

    def test_registering_after_a_miss(self, fake_installer_class):
        registry = InstallerRegistry()
        assert registry.resolve("app.a") is None

        registry.register("app.a", lambda: fake_installer_class("app.a"))
        assert registry.resolve("app.a") is not None
        assert registry.component_ids == ["app.a"]

    def test_context_is_injected(self, temp_dir):
        class ContextInstaller:
            def __init__(self):
                self.context = None

            def set_context(self, context):
                self.context = context

        context = ApplicationContext(application_dir=temp_dir)
        registry = InstallerRegistry({"app.a": ContextInstaller}, context=context)

        assert registry.resolve("app.a").context is context

    def test_installers_without_set_context_are_left_alone(
        self, temp_dir, fake_installer_class
    ):
        context = ApplicationContext(application_dir=temp_dir)
        registry = InstallerRegistry(
            {"app.a": lambda: fake_installer_class("app.a")}, context=context
        )
        assert not hasattr(registry.resolve("app.a"), "context")

    def test_base_installers_take_the_registered_id(self):
        class SearchInstaller(BaseInstaller):
            component_id = "app.search"

            def install(self):
                pass

            def uninstall(self):
                pass

            def is_installed(self):
                return False

        registry = InstallerRegistry(
            {"acme.search": lambda: SearchInstaller(), "acme.index": SearchInstaller}
        )

        assert registry.resolve("acme.search").name == "acme.search"
        assert registry.resolve("acme.index").name == "acme.index"


class TestDependencyCache:
    def test_queries_each_installer_once(self, fake_installer_class):
        installer = fake_installer_class("app.a", ["app.b", "app.b"])
        cache = DependencyCache(InstallerRegistry({"app.a": lambda: installer}))

        assert cache.dependencies_of("app.a") == ["app.b", "app.b"]
        assert cache.dependencies_of("app.a") == ["app.b", "app.b"]
        assert installer.dependency_queries == 1
        assert "app.a" in cache

    def test_no_installer_means_no_dependencies(self):
        cache = DependencyCache(InstallerRegistry())
        assert cache.dependencies_of("app.z") == []
        assert len(cache) == 1


class TestInstall:
    def test_chain_installs_dependencies_first(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        harness.service.install("app.a")

        assert harness.actions("install") == ["app.c", "app.b", "app.a"]
        assert all(i.installed for i in harness.installers.values())

    def test_diamond(self, graph_harness, diamond_graph):
        harness = graph_harness(diamond_graph)
        harness.service.install("app.a")

        assert harness.actions("install") == ["app.d", "app.b", "app.c", "app.a"]

    def test_installed_components_are_skipped(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, installed={"app.b"})
        harness.service.install("app.a")

        assert harness.actions("install") == ["app.c", "app.a"]
        assert "app.b: was already installed, skipping." in harness.messages.messages()

    def test_force_installs_everything(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, installed=set(chain_graph))
        harness.service.install("app.a", force=True)

        assert harness.actions("install") == ["app.c", "app.b", "app.a"]
        assert all(i.status_queries == 0 for i in harness.installers.values())

    def test_component_without_installer(self, graph_harness):
        harness = graph_harness({"app.z": []}, without_installer={"app.z"})
        service = harness.service

        assert not service.is_installable("app.z")
        assert service.is_installed("app.z")
        service.install("app.z")
        assert harness.calls == []

    def test_missing_installer_in_the_middle(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, without_installer={"app.b"})
        harness.service.install("app.a")

        # app.b has no installer, so app.c is never discovered
        assert harness.service.plan_install("app.a") == ["app.b", "app.a"]
        assert harness.actions("install") == ["app.a"]
        assert "app.b: no installer, skip." in harness.messages.messages("debug")

    def test_cycle_aborts_before_any_install(self, graph_harness):
        harness = graph_harness(
            {"app.x": ["app.a"], "app.a": ["app.b"], "app.b": ["app.a"]}
        )

        with pytest.raises(CyclicDependencyError) as exc_info:
            harness.service.install("app.x")

        assert exc_info.value.culprit == "app.a"
        assert exc_info.value.chain == ["app.a", "app.b", "app.a"]
        assert harness.calls == []

    def test_detector_is_reset_per_install(self, graph_harness):
        harness = graph_harness(
            {
                "app.a": ["app.b"],
                "app.b": ["app.a"],
                "app.c": ["app.d"],
                "app.d": [],
            }
        )
        with pytest.raises(CyclicDependencyError):
            harness.service.install("app.a")

        harness.service.install("app.c")
        assert harness.actions("install") == ["app.d", "app.c"]
        assert harness.service.detector.edges() == [("app.c", "app.d")]

    def test_installer_error_propagates_without_rollback(
        self, graph_harness, chain_graph
    ):
        harness = graph_harness(chain_graph, fail_on={"app.b": "install"})

        with pytest.raises(RuntimeError, match="install of app.b failed"):
            harness.service.install("app.a")

        assert harness.calls == [("install", "app.c"), ("install", "app.b")]
        assert harness.installers["app.c"].installed
        assert not harness.installers["app.a"].installed

    def test_dependencies_are_queried_once_per_service(
        self, graph_harness, chain_graph
    ):
        harness = graph_harness(chain_graph)
        harness.service.install("app.a")
        harness.service.install("app.a", force=True)
        harness.service.install("app.b")

        assert all(i.dependency_queries == 1 for i in harness.installers.values())

    def test_messages(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        harness.service.install("app.a")

        assert harness.messages.messages("info") == [
            'Calling "install" method with app.a.'
        ]
        debug = harness.messages.messages("debug")
        assert "...3 component(s) to install." in debug
        assert "app.a (1/3): -> installing app.c." in debug
        assert "app.a (3/3): -> installing app.a." in debug
        assert "app.c: was installed." in debug


class TestUninstall:
    def test_chain_uninstalls_dependents_first(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, installed=set(chain_graph))
        harness.service.uninstall("app.c")

        assert harness.actions("uninstall") == ["app.a", "app.b", "app.c"]

    def test_uninstall_is_unconditional(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        harness.service.uninstall("app.c")

        assert harness.actions("uninstall") == ["app.a", "app.b", "app.c"]
        assert all(i.status_queries == 0 for i in harness.installers.values())

    def test_only_dependents_are_removed(self, graph_harness, diamond_graph):
        harness = graph_harness(diamond_graph)
        harness.service.uninstall("app.b")

        assert harness.actions("uninstall") == ["app.a", "app.b"]

    def test_component_without_installer(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, without_installer={"app.c"})
        harness.service.uninstall("app.c")

        assert harness.actions("uninstall") == ["app.a", "app.b"]
        assert "app.c: no installer, skip." in harness.messages.messages("debug")

    def test_reverse_index_is_built_once(self, graph_harness, chain_graph, mocker):
        harness = graph_harness(chain_graph)
        spy = mocker.spy(harness.service.enumerator, "list_component_ids")

        harness.service.uninstall("app.c")
        harness.service.uninstall("app.b")

        assert spy.call_count == 1
        assert harness.service.reverse_index == {
            "app.b": ["app.a"],
            "app.c": ["app.b"],
        }

    def test_installer_error_propagates(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, fail_on={"app.a": "uninstall"})

        with pytest.raises(RuntimeError, match="uninstall of app.a failed"):
            harness.service.uninstall("app.c")
        assert harness.calls == [("uninstall", "app.a")]


class TestInstallAll:
    def test_installs_each_missing_component_once(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        harness.service.install_all()

        assert harness.actions("install") == ["app.c", "app.b", "app.a"]

    def test_force_replans_every_component(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, installed=set(chain_graph))
        harness.service.install_all(force=True)

        assert harness.actions("install") == [
            "app.c",
            "app.b",
            "app.a",
            "app.c",
            "app.b",
            "app.c",
        ]

    def test_skips_components_without_installer(self, graph_harness):
        harness = graph_harness(
            {"app.a": [], "app.z": []}, without_installer={"app.z"}
        )
        harness.service.install_all()

        assert harness.actions("install") == ["app.a"]
        assert harness.messages.messages("info") == [
            'Calling "install_all" method.',
            'Calling "install" method with app.a.',
        ]


class TestUninstallAll:
    def test_uninstalls_every_component(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        harness.service.uninstall_all()

        assert harness.actions("uninstall") == [
            "app.a",
            "app.a",
            "app.b",
            "app.a",
            "app.b",
            "app.c",
        ]


class TestDescribePlan:
    def test_install_plan(self, graph_harness, chain_graph):
        harness = graph_harness(
            chain_graph, installed={"app.b"}, without_installer={"app.c"}
        )
        plan = harness.service.describe_plan("app.a")

        assert plan.action == INSTALL
        assert plan.component_ids == ["app.c", "app.b", "app.a"]
        assert [s.will_run for s in plan.steps] == [False, False, True]
        assert plan.steps[0].skip_reason == "no installer"
        assert plan.steps[1].skip_reason == "already installed"
        assert harness.calls == []

    def test_forced_install_plan(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, installed=set(chain_graph))
        plan = harness.service.describe_plan("app.a", force=True)

        assert [s.will_run for s in plan.steps] == [True, True, True]

    def test_uninstall_plan(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph, without_installer={"app.c"})
        plan = harness.service.describe_plan("app.c", action=UNINSTALL)

        assert plan.component_ids == ["app.a", "app.b", "app.c"]
        assert [s.will_run for s in plan.steps] == [True, True, False]

    def test_unknown_action(self, graph_harness, chain_graph):
        harness = graph_harness(chain_graph)
        with pytest.raises(ValueError, match="Unknown plan action"):
            harness.service.describe_plan("app.a", action="upgrade")


def test_message_from_plugin(graph_harness, chain_graph):
    harness = graph_harness(chain_graph)
    harness.service.message_from_plugin("app.a", "created tables", "warning")

    assert harness.messages.records == [("warning", "---- app.a: created tables")]
