"""Tests for package.json synthesis."""

from __future__ import annotations

import json

from npm_bridge.manifest import (
    PACKAGE_FILE_NAME,
    package_file,
    project_to_package,
    read_package,
    render_package,
    synthesize,
)

_META = {"name": "foo", "version": "1.0.0", "description": "d"}


class TestSynthesize:
    def test_minimal_document(self):
        doc = synthesize(_META, None, {"lodash": "^4.0.0"})
        assert doc == {
            "private": True,
            "name": "foo",
            "description": "d",
            "version": "1.0.0",
            "dependencies": {"lodash": "^4.0.0"},
        }

    def test_existing_unrelated_field_retained(self):
        doc = synthesize(_META, {"license": "MIT"}, {})
        assert doc["license"] == "MIT"

    def test_existing_fields_overridden_by_overlays(self):
        existing = {"name": "old", "private": False, "dependencies": {"x": "1"}}
        doc = synthesize(_META, existing, {"y": "2"})
        assert doc["name"] == "foo"
        assert doc["private"] is True
        assert doc["dependencies"] == {"y": "2"}

    def test_main_adds_start_script(self):
        doc = synthesize(_META, None, {}, main="index.js")
        assert doc["scripts"] == {"start": "run index.js"}

    def test_main_not_validated(self):
        doc = synthesize(_META, None, {}, main="does/not/exist.js")
        assert doc["scripts"]["start"] == "run does/not/exist.js"

    def test_no_main_no_scripts(self):
        assert "scripts" not in synthesize(_META, None, {})

    def test_extra_fields_have_final_say(self):
        extra = {
            "private": False,
            "dependencies": {"only": "1.0"},
            "scripts": {"test": "jest"},
            "license": "ISC",
        }
        doc = synthesize(_META, {"license": "MIT"}, {"lodash": "^4"}, extra=extra, main="i.js")
        assert doc["private"] is False
        assert doc["dependencies"] == {"only": "1.0"}
        assert doc["scripts"] == {"test": "jest"}
        assert doc["license"] == "ISC"

    def test_does_not_mutate_existing(self):
        existing = {"license": "MIT"}
        synthesize(_META, existing, {"a": "1"})
        assert existing == {"license": "MIT"}


class TestReadPackage:
    def test_missing(self, tmp_path):
        assert read_package(tmp_path / PACKAGE_FILE_NAME) is None

    def test_valid(self, tmp_path):
        path = tmp_path / PACKAGE_FILE_NAME
        path.write_text('{"license": "MIT"}')
        assert read_package(path) == {"license": "MIT"}

    def test_unparseable_treated_as_absent(self, tmp_path):
        path = tmp_path / PACKAGE_FILE_NAME
        path.write_text("{not json")
        assert read_package(path) is None

    def test_non_object_treated_as_absent(self, tmp_path):
        path = tmp_path / PACKAGE_FILE_NAME
        path.write_text("[1, 2]")
        assert read_package(path) is None


class TestProjectToPackage:
    def test_scenario_no_existing_manifest(self, make_project):
        project = make_project(npm={"dependencies": [["lodash", "^4.0.0"]]})
        assert project_to_package(project) == {
            "private": True,
            "name": "foo",
            "description": "d",
            "version": "1.0.0",
            "dependencies": {"lodash": "^4.0.0"},
        }

    def test_merges_existing_manifest(self, make_project, tmp_path):
        (tmp_path / PACKAGE_FILE_NAME).write_text(
            json.dumps({"license": "MIT", "dependencies": {"a": "2.0", "b": "1.0"}})
        )
        project = make_project(npm={"dependencies": [["a", "1.0"]]})
        doc = project_to_package(project)
        assert doc["license"] == "MIT"
        assert doc["dependencies"] == {"a": "1.0", "b": "1.0"}

    def test_unparseable_existing_manifest_ignored(self, make_project, tmp_path):
        (tmp_path / PACKAGE_FILE_NAME).write_text("garbage")
        project = make_project(npm={"dependencies": {"lodash": "^4.0.0"}})
        doc = project_to_package(project)
        assert doc["dependencies"] == {"lodash": "^4.0.0"}
        assert "license" not in doc

    def test_existing_dependencies_not_a_mapping(self, make_project, tmp_path):
        (tmp_path / PACKAGE_FILE_NAME).write_text('{"dependencies": ["x"]}')
        doc = project_to_package(make_project(npm={"dependencies": [["a", "1"]]}))
        assert doc["dependencies"] == {"a": "1"}

    def test_main_and_package_overrides(self, make_project):
        project = make_project(main="index.js", npm={"package": {"license": "MIT"}})
        doc = project_to_package(project)
        assert doc["scripts"]["start"] == "run index.js"
        assert doc["license"] == "MIT"

    def test_reads_manifest_under_npm_root(self, make_project, tmp_path):
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / PACKAGE_FILE_NAME).write_text('{"license": "MIT"}')
        project = make_project(npm={"root": "web"})
        assert package_file(project) == tmp_path / "web" / PACKAGE_FILE_NAME
        assert project_to_package(project)["license"] == "MIT"


class TestRenderPackage:
    def test_pretty_printed(self):
        text = render_package({"private": True, "dependencies": {"a": "1"}})
        assert text == '{\n  "private": true,\n  "dependencies": {\n    "a": "1"\n  }\n}\n'

    def test_parses_back(self):
        doc = synthesize(_META, None, {"lodash": "^4.0.0"}, main="index.js")
        assert json.loads(render_package(doc)) == doc
