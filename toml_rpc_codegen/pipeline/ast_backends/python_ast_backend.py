"""
Python AST-based code generation backend.

Generates dataclasses, IntEnums and async Protocols from IR using the
built-in ast module.
"""

from __future__ import annotations

import ast
import collections
import keyword

from ..analyzer.ir_nodes import IR, EnumDef, MessageDef, MethodDef, ServiceDef
from ..config import CodeGeneratorConfig
from .base import AstBackend
from .type_mapping import PrimitiveType


class PythonAstBackend(AstBackend):
    """Python code generation backend using AST."""

    TEMPLATE_LANG = "python"

    FILE_EXTENSION = "py"

    COMMENT_PREFIX = "#"

    TYPE_MAP = {
        PrimitiveType.U32: "int",
        PrimitiveType.TEXT: "str",
        PrimitiveType.UNKNOWN: "Unknown",
    }

    # Names bound by the generated imports; a schema entity must not rebind them
    IMPORTED_NAMES = {"abstractmethod", "dataclass", "IntEnum", "Protocol"}

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()

    def generate(self, ir: IR, generation_comment: str = "") -> str:
        """Generate Python code from IR using AST."""
        module = self.build_module(ir)

        statements = module.body
        future = [ast.unparse(node) for node in statements if isinstance(node, ast.ImportFrom) and node.module == "__future__"]
        imports = [ast.unparse(node) for node in statements if isinstance(node, ast.ImportFrom) and node.module != "__future__"]
        classes = [ast.unparse(node) for node in statements if isinstance(node, ast.ClassDef)]

        sections = ["\n".join(future)]
        if imports:
            sections.append("\n".join(imports))
        code = "\n\n".join(sections)
        if classes:
            code += "\n\n\n" + "\n\n\n".join(classes)

        return self.render_prefix(generation_comment, ir.source_name) + code + "\n"

    def build_module(self, ir: IR) -> ast.Module:
        """Build the Python AST: all messages, then all enums, then all services."""
        # Reset import tracking
        self.python_imports = {("__future__", "annotations")}

        class_nodes: list[ast.stmt] = []
        class_nodes.extend(self._generate_dataclass(message) for message in ir.messages)
        class_nodes.extend(self._generate_enum_class(enum) for enum in ir.enums)
        class_nodes.extend(self._generate_protocol(service) for service in ir.services)

        module = ast.Module(body=[*self._generate_imports(), *class_nodes], type_ignores=[])
        ast.fix_missing_locations(module)
        return module

    def escape_identifier(self, name: str) -> str:
        """Append an underscore to keywords and imported names (`class` -> `class_`)."""
        if keyword.iskeyword(name) or name in self.IMPORTED_NAMES:
            return f"{name}_"
        return name

    def _generate_imports(self) -> list[ast.stmt]:
        """Generate import statements as AST nodes, __future__ first."""
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        modules = sorted(import_groups, key=lambda m: (m != "__future__", m))
        return [
            ast.ImportFrom(
                module=module,
                names=[ast.alias(name=n, asname=None) for n in sorted(import_groups[module])],
                level=0,
            )
            for module in modules
        ]

    def _name(self, name: str) -> ast.Name:
        return ast.Name(id=self.escape_identifier(name), ctx=ast.Load())

    def _generate_dataclass(self, message: MessageDef) -> ast.ClassDef:
        """Generate a dataclass for a message."""
        self.python_imports.add(("dataclasses", "dataclass"))

        decorator: ast.expr = ast.Name(id="dataclass", ctx=ast.Load())
        if self.config.frozen_dataclasses:
            decorator = ast.Call(
                func=decorator,
                args=[],
                keywords=[ast.keyword(arg="frozen", value=ast.Constant(value=True))],
            )

        body: list[ast.stmt] = []
        for field in message.fields:
            body.append(
                ast.AnnAssign(
                    target=ast.Name(id=self.escape_identifier(field.name), ctx=ast.Store()),
                    annotation=ast.Name(id=self.translate_type(field, message), ctx=ast.Load()),
                    value=None,
                    simple=1,
                )
            )

        return ast.ClassDef(
            name=self.escape_identifier(message.name),
            bases=[],
            keywords=[],
            body=body or [ast.Pass()],
            decorator_list=[decorator],
            type_params=[],
        )

    def _generate_enum_class(self, enum: EnumDef) -> ast.ClassDef:
        """Generate an IntEnum with explicit values."""
        self.python_imports.add(("enum", "IntEnum"))

        body: list[ast.stmt] = [
            ast.Assign(
                targets=[ast.Name(id=self.escape_identifier(variant.name), ctx=ast.Store())],
                value=ast.Constant(value=variant.value),
            )
            for variant in enum.variants
        ]

        return ast.ClassDef(
            name=self.escape_identifier(enum.name),
            bases=[ast.Name(id="IntEnum", ctx=ast.Load())],
            keywords=[],
            body=body or [ast.Pass()],
            decorator_list=[],
            type_params=[],
        )

    def _generate_protocol(self, service: ServiceDef) -> ast.ClassDef:
        """Generate a Protocol with one abstract async method per service method."""
        self.python_imports.add(("typing", "Protocol"))

        body: list[ast.stmt] = [self._generate_method(method) for method in service.methods]

        return ast.ClassDef(
            name=self.escape_identifier(service.name),
            bases=[ast.Name(id="Protocol", ctx=ast.Load())],
            keywords=[],
            body=body or [ast.Pass()],
            decorator_list=[],
            type_params=[],
        )

    def _generate_method(self, method: MethodDef) -> ast.AsyncFunctionDef:
        self.python_imports.add(("abc", "abstractmethod"))

        arguments = ast.arguments(
            posonlyargs=[],
            args=[
                ast.arg(arg="self"),
                ast.arg(arg="input", annotation=self._name(method.input.name)),
            ],
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[],
        )

        return ast.AsyncFunctionDef(
            name=self.escape_identifier(method.name),
            args=arguments,
            body=[ast.Expr(value=ast.Constant(value=...))],
            decorator_list=[ast.Name(id="abstractmethod", ctx=ast.Load())],
            returns=self._name(method.output.name),
            type_params=[],
        )
