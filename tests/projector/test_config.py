from pathlib import Path

import pytest
from pydantic import ValidationError

import projector.config as config
from projector.errors import InvalidDirectoryError
from projector.settings import ProjectorSettings


class TestResolveScaffold:
    def test_missing_scaffold_is_init(self) -> None:
        assert config.resolve_scaffold(None) == config.InitScaffold()

    def test_string_is_always_a_template_directory(self) -> None:
        assert config.resolve_scaffold("/srv/template/") == config.TemplateScaffold(
            dir=Path("/srv/template")
        )

    def test_string_init_is_not_special(self) -> None:
        with pytest.raises(InvalidDirectoryError) as exc_info:
            config.resolve_scaffold("init")
        assert exc_info.value.path == "init"

    def test_path_is_template_without_decoding(self) -> None:
        template = Path("/srv/template")
        assert config.resolve_scaffold(template) == config.TemplateScaffold(dir=template)

    def test_tagged_template_with_string_dir(self) -> None:
        resolved = config.resolve_scaffold({"type": "template", "dir": "/srv/t"})
        assert resolved == config.TemplateScaffold(dir=Path("/srv/t"))

    def test_tagged_template_with_path_dir(self) -> None:
        resolved = config.resolve_scaffold({"type": "template", "dir": Path("/srv/t")})
        assert resolved == config.TemplateScaffold(dir=Path("/srv/t"))

    def test_tagged_template_with_bad_dir(self) -> None:
        with pytest.raises(InvalidDirectoryError):
            config.resolve_scaffold({"type": "template", "dir": "srv/t"})
        with pytest.raises(InvalidDirectoryError):
            config.resolve_scaffold({"type": "template"})

    def test_resolved_scaffolds_pass_through(self) -> None:
        template = config.TemplateScaffold(dir=Path("/srv/t"))
        assert config.resolve_scaffold(template) is template
        assert config.resolve_scaffold(config.InitScaffold()) == config.InitScaffold()

    @pytest.mark.parametrize("value", [{"type": "init"}, {"type": "other"}, {}, 42])
    def test_other_shapes_are_init(self, value: object) -> None:
        assert config.resolve_scaffold(value) == config.InitScaffold()


class TestResolvePackage:
    def test_omitted_package_is_enabled_without_install(self) -> None:
        assert config.resolve_package(None) == config.PackageSettings(enabled=True, install=False)

    def test_disabled_package(self) -> None:
        assert config.resolve_package(False) == config.PackageSettings(
            enabled=False, install=False
        )

    def test_install_flag(self) -> None:
        assert config.resolve_package(config.PackageInput(install=True)) == (
            config.PackageSettings(enabled=True, install=True)
        )
        assert config.resolve_package(config.PackageInput()) == (
            config.PackageSettings(enabled=True, install=False)
        )


class TestResolveDirectory:
    def test_decodes_string(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path)
        assert config.resolve_directory("/work/app/", settings) == Path("/work/app")

    def test_passes_path_through(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path)
        assert config.resolve_directory(tmp_path / "app", settings) == tmp_path / "app"

    def test_invalid_string(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path)
        with pytest.raises(InvalidDirectoryError):
            config.resolve_directory("work/app", settings)

    def test_omitted_directory_creates_temp_dir(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path)

        directory = config.resolve_directory(None, settings)

        assert directory.is_dir()
        assert directory.parent == tmp_path
        assert directory.name.startswith("projector-")


class TestResolveConfig:
    def test_full_resolution(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path)
        resolved = config.resolve_config(
            config.ConfigInput(
                directory="/work/app",
                scaffold={"type": "template", "dir": "/srv/t"},
                package={"install": True},
            ),
            settings=settings,
        )

        assert resolved == config.ResolvedConfig(
            directory=Path("/work/app"),
            scaffold=config.TemplateScaffold(dir=Path("/srv/t")),
            package=config.PackageSettings(enabled=True, install=True),
        )

    def test_bad_scaffold_does_not_create_temp_dir(self, tmp_path: Path) -> None:
        settings = ProjectorSettings(temp_root=tmp_path / "tmp")

        with pytest.raises(InvalidDirectoryError):
            config.resolve_config(config.ConfigInput(scaffold="relative"), settings=settings)

        assert not (tmp_path / "tmp").exists()


class TestConfigInput:
    def test_links_are_empty_without_package_options(self) -> None:
        assert config.ConfigInput().links == []
        assert config.ConfigInput(package=False).links == []

    def test_links_preserve_order(self) -> None:
        config_input = config.ConfigInput(
            package={
                "links": [
                    {"dir": "/libs/a", "protocol": "link"},
                    {"dir": Path("/libs/b"), "protocol": "file"},
                ]
            }
        )

        assert [(link.dir, link.protocol) for link in config_input.links] == [
            ("/libs/a", "link"),
            (Path("/libs/b"), "file"),
        ]

    def test_unknown_link_protocol_fails_fast(self) -> None:
        with pytest.raises(ValidationError):
            config.ConfigInput(package={"links": [{"dir": "/libs/a", "protocol": "portal"}]})

    def test_package_true_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            config.ConfigInput(package=True)
