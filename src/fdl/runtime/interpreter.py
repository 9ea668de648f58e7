"""
Tree-walking interpreter for FDL.

Evaluates resolved statements against an element provider. Each
statement runs in source order; a runtime error aborts only its own
statement and is recorded. If any error was recorded the run produces
an empty bundle, otherwise the bundle holds every level-0 resource in
ascending path order.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, List, Optional

from ..ast import AstVisitor, Expression, Element, Get, Set, Literal, Date, Statement
from ..errors import CoercionError, Diagnostic, ErrorReporter, FdlRuntimeError
from ..models import Bundle
from ..tokens import Token
from ..types import TypeService
from .context import RunContext, create_context
from .provider import ElementProvider, ProviderError, WrongShape, FIELD_INVALID
from .model_provider import ModelElementProvider

logger = logging.getLogger(__name__)


SCOPE_RESOLUTION_ERROR = "unexpected error in scope resolution; this should not happen."
INVALID_ELEMENT_ERROR = "tried to access a property on an invalid element."


@dataclass
class InterpretResult:
    """Result of running a listing."""
    bundle: Bundle = field(default_factory=Bundle)
    static_errors: List[Diagnostic] = field(default_factory=list)
    runtime_errors: List[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.static_errors or self.runtime_errors)

    @property
    def success(self) -> bool:
        return not self.has_errors

    def format_errors(self) -> str:
        """Render both error lists the way ErrorReporter.format_all does."""
        reporter = ErrorReporter()
        for diagnostic in self.static_errors + self.runtime_errors:
            reporter.add(diagnostic)
        return reporter.format_all()


@contextmanager
def _errors_at(token: Token):
    """Re-raise provider and coercion failures as runtime errors at token."""
    try:
        yield
    except (ProviderError, CoercionError) as e:
        raise FdlRuntimeError(token, str(e)) from e


class Interpreter(AstVisitor):
    """
    Tree-walking interpreter for FDL.

    The path table in the context must be filled by the resolver before
    interpret() is called.

    Usage:
        ctx = create_context()
        resolve(statements, ctx.paths)
        bundle = Interpreter(context=ctx).interpret(statements)
    """

    def __init__(self, provider: Optional[ElementProvider] = None,
                 type_service: Optional[TypeService] = None,
                 context: Optional[RunContext] = None):
        self.types = type_service if type_service is not None else TypeService()
        self.provider = (provider if provider is not None
                         else ModelElementProvider(type_service=self.types))
        self.ctx = context if context is not None else create_context()

    def interpret(self, statements: List[Statement]) -> Bundle:
        """Run every statement; return the bundle, empty if anything failed."""
        logger.debug("starting interpretation of %d statements.", len(statements))
        for statement in statements:
            try:
                statement.accept(self)
            except FdlRuntimeError as e:
                logger.debug("statement failed: %s", e)
                self.ctx.reporter.add_error(e)

        if self.ctx.has_errors:
            logger.debug("returning empty bundle due to errors.")
            return Bundle()

        roots = self.ctx.roots.values()
        logger.debug("interpretation complete; %d bundle entries.", len(roots))
        return Bundle(roots)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _evaluate(self, expr: Expression) -> Any:
        return expr.accept(self)

    def _evaluate_index(self, expr: Optional[Expression]) -> int:
        if expr is None:
            return 0
        return int(self._evaluate(expr))

    def _path_of(self, node: Expression, token: Token) -> str:
        path = self.ctx.paths.get(node)
        if not path:
            raise FdlRuntimeError(token, SCOPE_RESOLUTION_ERROR)
        return path

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_Element(self, node: Element) -> Any:
        path = self._path_of(node, node.name)

        result = self.ctx.cache.get(path)
        if result is not None:
            return result

        with _errors_at(node.name):
            result = self.provider.instantiate(node.name.lexeme)
        self.ctx.cache.put(path, result)

        if self.ctx.at_top_level and self.provider.is_root(result):
            logger.debug("registering root %s at '%s'", node.name.lexeme, path)
            self.ctx.roots.register(path, result)

        return result

    def visit_Get(self, node: Get) -> Any:
        obj = self._evaluate(node.object)
        index = self._evaluate_index(node.index)

        path = self._path_of(node, node.field)
        result = self.ctx.cache.get(path)
        if result is not None:
            return result

        if not self.provider.is_element(obj):
            raise FdlRuntimeError(node.field, INVALID_ELEMENT_ERROR)

        with _errors_at(node.field):
            result = self.provider.read_field(obj, node.field.lexeme, index)
        self.ctx.cache.put(path, result)
        return result

    def visit_Set(self, node: Set) -> Any:
        element = self._evaluate(node.object)
        with self.ctx.down_level():
            value = self._evaluate(node.value)
        index = self._evaluate_index(node.index)

        if not self.provider.is_element(element):
            raise FdlRuntimeError(node.field, INVALID_ELEMENT_ERROR)

        name = node.field.lexeme
        with _errors_at(node.field):
            self.provider.check_position(element, name, index)
            result = self._assign_typed(element, name, value)
            if result is None:
                result = self._assign_guessing(element, name, value, index)

        if result is None:
            raise FdlRuntimeError(node.field, FIELD_INVALID)
        return result

    def visit_Literal(self, node: Literal) -> Any:
        if node.declared_type is None:
            return node.value
        with _errors_at(node.token):
            return self.types.coerce(node.value, node.declared_type)

    def visit_Date(self, node: Date) -> date:
        with _errors_at(node.token):
            return self.types.as_date(node.value, node.format)

    # =========================================================================
    # Assignment
    # =========================================================================

    def _assign_typed(self, element: Any, name: str, value: Any) -> Optional[Any]:
        """Single assignment matching an already typed value, if it applies."""
        p = self.provider
        try:
            if isinstance(value, date):
                return p.assign_date(element, name, value)
            if isinstance(value, bool):
                return p.assign_boolean(element, name, value)
            if isinstance(value, float):
                return p.assign_decimal(element, name, value)
            if isinstance(value, int):
                return p.assign_integer(element, name, value)
        except WrongShape as e:
            logger.debug("typed assignment to '%s' does not apply: %s", name, e)
        return None

    def _assign_parsed(self, element: Any, name: str, value: Any,
                       parse: Callable[[str], Any],
                       assign: Callable[[Any, str, Any], Any]) -> Optional[Any]:
        if not isinstance(value, str):
            return None
        try:
            number = parse(value)
        except CoercionError:
            return None
        try:
            return assign(element, name, number)
        except WrongShape:
            return None

    def _assign_guessing(self, element: Any, name: str, value: Any, index: int) -> Optional[Any]:
        """Try each way of setting the field in priority order; first success wins."""
        p = self.provider
        strategies = [
            lambda: p.assign_primitive_list_entry(element, name, value, index),
            lambda: p.assign_enumerated_value(element, name, value),
            lambda: p.assign_indexed_collection(element, name, index, value),
            lambda: p.assign_date(element, name, value),
            lambda: p.assign_direct(element, name, value),
            lambda: self._assign_parsed(element, name, value,
                                        self.types.as_integer, p.assign_integer),
            lambda: self._assign_parsed(element, name, value,
                                        self.types.as_decimal, p.assign_decimal),
        ]
        for strategy in strategies:
            result = strategy()
            if result is not None:
                return result
        return None


def interpret(statements: List[Statement], provider: Optional[ElementProvider] = None,
              reporter: Optional[ErrorReporter] = None) -> Bundle:
    """
    Resolve and interpret parsed statements.

    This is a convenience wrapper around PathResolver and Interpreter.
    """
    from ..resolver import PathResolver

    ctx = create_context(reporter)
    PathResolver(ctx.paths).resolve(statements)
    return Interpreter(provider, context=ctx).interpret(statements)


def compile_and_run(source: str, provider: Optional[ElementProvider] = None,
                    settings=None) -> InterpretResult:
    """
    High-level API to compile and run an FDL listing in one call.

        from fdl import compile_and_run

        result = compile_and_run('''
            Patient["john"].name.family = "Doe";
            Patient["john"].birthDate = "Aug 27, 1967";
        ''')

        if result.success:
            print(result.bundle.to_json(indent=2))
        else:
            print(result.format_errors())

    Args:
        source: FDL source code as a string
        provider: Element provider; the built-in models are used if omitted
        settings: Optional fdl.config.Settings (date formats)

    Returns:
        InterpretResult with the bundle and every diagnostic
    """
    from ..lexer import tokenize
    from ..parser import parse
    from ..resolver import PathResolver

    type_service = TypeService(settings.date_formats) if settings is not None else TypeService()
    if provider is None:
        provider = ModelElementProvider(type_service=type_service)

    ctx = create_context()
    reporter = ctx.reporter

    tokens = tokenize(source, reporter)
    statements = parse(tokens, reporter)

    # Static errors stop the run before evaluation
    if reporter.has_static_errors:
        return InterpretResult(Bundle(), reporter.static_errors, reporter.runtime_errors)

    PathResolver(ctx.paths).resolve(statements)
    interpreter = Interpreter(provider, type_service, ctx)
    bundle = interpreter.interpret(statements)
    return InterpretResult(bundle, reporter.static_errors, reporter.runtime_errors)
