"""Tests for cascade.codegen.compiler (facade + component naming)."""

import pytest

from cascade.codegen.compiler import (
    ComponentDescriptor,
    compile_component,
    compile_descriptor,
    default_component_name,
    derive_component_name,
    validate_component_name,
)
from cascade.codegen.models import parse_design_node
from cascade.errors import ComponentNameError


class TestDeriveComponentName:

    @pytest.mark.parametrize("input_name,expected", [
        ("my cool-frame/2", "MyCoolFrame2"),
        ("photo_grid_v2", "PhotoGridV2"),
        ("LOGIN card", "LoginCard"),
        ("  leading space", "LeadingSpace"),
        ("card", "Card"),
    ])
    def test_conversion(self, input_name, expected):
        assert derive_component_name(input_name) == expected

    @pytest.mark.parametrize("input_name", ["???", "", "  "])
    def test_falls_back_to_component(self, input_name):
        assert derive_component_name(input_name) == "Component"


class TestDefaultComponentName:

    def test_strips_non_alphanumerics(self):
        assert default_component_name("Login Card / v2!") == "LoginCardv2"

    def test_keeps_case(self):
        assert default_component_name("login card") == "logincard"


class TestValidateComponentName:

    def test_valid_name_returned(self):
        assert validate_component_name("LoginCard2") == "LoginCard2"

    @pytest.mark.parametrize("name,message", [
        ("", "Component name cannot be empty"),
        ("   ", "Component name cannot be empty"),
        ("loginCard", "Component name must start with an uppercase letter"),
        ("Login-Card", "Component name can only contain letters and numbers"),
        ("Login Card", "Component name can only contain letters and numbers"),
    ])
    def test_rejects(self, name, message):
        with pytest.raises(ComponentNameError, match=message):
            validate_component_name(name)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_component_name("x")


class TestCompileComponent:

    def test_name_derived_from_root(self, login_frame_data):
        code = compile_component(parse_design_node(login_frame_data), "mui-tsx")
        assert "export const LoginCard: React.FC<LoginCardProps>" in code
        assert code.endswith("export default LoginCard;\n")

    def test_explicit_name_used_verbatim(self, login_frame_data):
        code = compile_component(parse_design_node(login_frame_data), "mui-jsx", "SignIn")
        assert "export const SignIn = ({ className, ...props }) => {" in code

    def test_root_markup_at_base_depth(self):
        root = parse_design_node({"id": "1:1", "name": "Empty", "type": "FRAME"})
        code = compile_component(root, "vanilla-jsx")
        assert "    <div className={className}>\n    <div style={{}} />\n    </div>" in code

    def test_default_variant_is_vanilla(self, login_frame_data):
        root = parse_design_node(login_frame_data)
        assert compile_component(root) == compile_component(root, "vanilla-jsx")

    def test_unknown_variant_equals_vanilla(self, login_frame_data):
        root = parse_design_node(login_frame_data)
        assert compile_component(root, "qwik") == compile_component(root, "vanilla-jsx")

    def test_additional_instructions(self, login_frame_data):
        root = parse_design_node(login_frame_data)
        code = compile_component(root, "styled-components", "Card", "Keep it accessible")
        assert "\n// Keep it accessible\n" in code

    def test_markup_contains_tree(self, login_frame_data):
        code = compile_component(parse_design_node(login_frame_data), "mui-tsx")
        assert '{"Welcome back"}' in code
        assert '"gap": "12px"' in code
        assert '"borderRadius": "8px"' in code


class TestCompileDescriptor:

    def test_raw_dict_root(self, login_frame_data):
        descriptor = ComponentDescriptor(
            root=login_frame_data,
            framework_variant="mui-tsx",
            component_name="Login",
            additional_instructions="note",
        )
        expected = compile_component(
            parse_design_node(login_frame_data), "mui-tsx", "Login", "note",
        )
        assert compile_descriptor(descriptor) == expected

    def test_defaults(self, login_frame_data):
        descriptor = ComponentDescriptor(root=parse_design_node(login_frame_data))
        assert "export const LoginCard: React.FC<LoginCardProps> = ({ className }) => {" in (
            compile_descriptor(descriptor)
        )
