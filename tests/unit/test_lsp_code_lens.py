"""Tests for the language server's code lens support."""

from __future__ import annotations

from pathlib import Path

from rspec_lens.core.config import CONFIG_FILENAME, LensSettings

SOURCE = 'RSpec.describe "Widget" do\n  it "renders" do\n  end\nend\n'


class TestLensesForDocument:
    def test_spec_file(self, workspace: Path, spec_path: Path) -> None:
        from rspec_lens.lsp.server import _lenses_for_document

        lenses = _lenses_for_document(spec_path, SOURCE, workspace, LensSettings())
        assert len(lenses) == 6
        assert [lens.command.title for lens in lenses[:3]] == ["Run", "Run In Terminal", "Debug"]
        assert lenses[0].command.command == "rubyLsp.runTest"
        assert lenses[0].data == {"type": "test", "group_id": None, "id": 1}
        assert lenses[3].data == {"type": "test", "group_id": 1}

    def test_non_spec_file(self, workspace: Path) -> None:
        from rspec_lens.lsp.server import _lenses_for_document

        path = workspace / "app" / "widget.rb"
        assert _lenses_for_document(path, SOURCE, workspace, LensSettings()) == []

    def test_file_outside_workspace_gives_no_lenses(self, tmp_path: Path) -> None:
        from rspec_lens.lsp.server import _lenses_for_document

        workspace = tmp_path / "project"
        workspace.mkdir()
        path = tmp_path / "elsewhere_spec.rb"
        assert _lenses_for_document(path, SOURCE, workspace, LensSettings()) == []

    def test_settings_command_used(self, workspace: Path, spec_path: Path) -> None:
        from rspec_lens.lsp.server import _lenses_for_document

        settings = LensSettings(rspec_command="bin/dc rspec")
        lenses = _lenses_for_document(spec_path, SOURCE, workspace, settings)
        assert lenses[1].command.arguments[2] == "bin/dc rspec spec/foo_spec.rb:1"
        assert lenses[0].command.arguments[2] == "bundle exec rspec spec/foo_spec.rb:1"


class TestCodeLensFromRecord:
    def test_range_and_arguments(self, workspace: Path, spec_path: Path) -> None:
        from rspec_lens.core.code_lens import collect_code_lenses
        from rspec_lens.lsp.server import _code_lens_from_record

        record = collect_code_lenses(SOURCE, spec_path, workspace_root=workspace)[3]
        lens = _code_lens_from_record(record)

        assert lens.range.start.line == 1
        assert lens.range.start.character == 2
        assert lens.range.end.line == 2
        assert lens.range.end.character == 5
        path, name, command_text, location = lens.command.arguments
        assert (path, name) == ("spec/foo_spec.rb", "renders")
        assert command_text == "bundle exec rspec spec/foo_spec.rb:2"
        assert location == {"start_line": 1, "start_column": 2, "end_line": 2, "end_column": 5}


class TestWorkspaceSettings:
    def test_file_then_options(self, tmp_path: Path) -> None:
        from rspec_lens.lsp.server import _load_workspace_settings

        (tmp_path / CONFIG_FILENAME).write_text('rspec_command = "rspec"\ndebug = true\n')
        settings = _load_workspace_settings(tmp_path, {"rspecCommand": "bin/rspec"})
        assert settings == LensSettings(rspec_command="bin/rspec", debug=True)

    def test_nested_section(self, tmp_path: Path) -> None:
        from rspec_lens.lsp.server import _load_workspace_settings

        settings = _load_workspace_settings(tmp_path, {"rspecLens": {"debug": True}})
        assert settings.debug is True

    def test_invalid_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        from rspec_lens.lsp.server import _load_workspace_settings

        (tmp_path / CONFIG_FILENAME).write_text("debug = \n")
        assert _load_workspace_settings(tmp_path, None) == LensSettings()

    def test_no_workspace(self) -> None:
        from rspec_lens.lsp.server import _load_workspace_settings

        assert _load_workspace_settings(None, {"debug": True}) == LensSettings(debug=True)


class TestConfigurationChange:
    def test_empty_change_keeps_initialization_options(self, tmp_path: Path) -> None:
        from rspec_lens.lsp.server import _apply_configuration_change, _load_workspace_settings

        settings = _load_workspace_settings(tmp_path, {"rspecCommand": "dc exec rspec"})
        assert _apply_configuration_change(settings, {}).rspec_command == "dc exec rspec"
        assert _apply_configuration_change(settings, None).rspec_command == "dc exec rspec"

    def test_change_without_our_section_keeps_values(self) -> None:
        from rspec_lens.lsp.server import _apply_configuration_change

        settings = LensSettings(rspec_command="dc exec rspec", debug=True)
        changed = _apply_configuration_change(settings, {"rubyLsp": {"formatter": "auto"}})
        assert changed == settings

    def test_change_overrides_only_given_keys(self) -> None:
        from rspec_lens.lsp.server import _apply_configuration_change

        settings = LensSettings(rspec_command="dc exec rspec", debug=False)
        changed = _apply_configuration_change(settings, {"rspecLens": {"debug": True}})
        assert changed == LensSettings(rspec_command="dc exec rspec", debug=True)
