from pathlib import Path

import pytest

from swagger_sync.generator.template import TemplateRenderer, interface_context
from swagger_sync.generator.typescript import (
    definition_class,
    definition_value_class,
    definitions_index,
    namespace_file,
    render_snapshot,
)
from swagger_sync.parser.base import Definition, Property
from swagger_sync.parser.swagger import parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def snapshot():
    return parse_openapi(FIXTURES / "petstore_v2.json")


class TestDefinitionClass:
    def test_declaration(self, snapshot):
        code = definition_class(snapshot.find_definition("User"))
        assert code.startswith("class User {")
        assert "id: number;" in code
        assert "address?: defs.Address;" in code
        assert "/** Display name */" in code

    def test_value_class_imports_dependencies(self, snapshot):
        code = definition_value_class(snapshot.find_definition("Order"))
        assert "import User from './User';" in code
        assert "import OrderItem from './OrderItem';" in code
        assert "owner = new User();" in code
        assert "items = [];" in code
        assert "id =" not in code

    def test_self_construction_is_avoided(self):
        node = Definition(name="Node", properties=[Property(name="parent", ref="#/definitions/Node")])
        code = definition_value_class(node)
        assert "parent = {} as Node;" in code
        assert "import" not in code

    def test_index(self):
        code = definitions_index(["A", "B"])
        assert "import A from './A';" in code
        assert "export { A, B };" in code


class TestTemplateRenderer:
    def test_context(self, snapshot):
        inter = snapshot.find_mod("userController").interfaces[0]
        context = interface_context(inter)
        assert context["method"] == "GET"
        assert context["description"] == "Get user"
        assert context["response_type"] == "defs.User"
        assert context["initial_value"] == "new defs.User()"

    def test_default_template(self, snapshot):
        renderer = TemplateRenderer()
        inter = [i for i in snapshot.find_mod("userController").interfaces if i.name == "postList"][0]
        code = renderer.implement(inter)
        assert "'/user/list'" in code
        assert "method: 'POST'" in code
        assert "body," in code
        assert "Response = string[]" in renderer.header(inter)
        assert "ObjectMap" in renderer.common_header()

    def test_custom_template(self, tmp_path, snapshot):
        template = tmp_path / "custom.j2"
        template.write_text(
            "{% macro implement(inter) %}// {{ inter.name }} {{ inter.method }}{% endmacro %}"
            "{% macro header(inter) %}{{ inter.response_type }}{% endmacro %}"
            "{% macro common_header() %}// common{% endmacro %}",
            encoding="utf-8",
        )
        renderer = TemplateRenderer(template)
        inter = snapshot.find_mod("orderController").interfaces[0]
        assert renderer.implement(inter) == "// getByOrderId GET"
        assert renderer.header(inter) == "defs.Order"


class TestRenderSnapshot:
    def test_files(self, snapshot):
        files = render_snapshot(snapshot, TemplateRenderer())
        assert "definitions/User.ts" in files
        assert "definitions/index.ts" in files
        assert "api.d.ts" in files
        assert "userController/getByIdProfile.ts" in files
        assert "userController/index.ts" in files
        assert "index.ts" in files

    def test_namespace_file(self, snapshot):
        code = namespace_file(snapshot, TemplateRenderer())
        assert code.startswith("declare namespace defs {")
        assert "declare namespace API {" in code
        assert "export namespace userController {" in code
        assert "export namespace getById {" in code
        assert " * /user" in code
