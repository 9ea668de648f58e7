"""
FDL: a small language for describing graphs of structured domain objects.

This module provides:
- Lexer: Tokenizes FDL source code
- Parser: Builds statements from tokens, recovering from syntax errors
- Resolver: Computes the canonical identity path of every node
- Interpreter: Evaluates statements into a bundle of root resources
- DefinitionLanguageAPI: Runs listings on a thread pool

Usage:
    from fdl import compile_and_run

    source = '''
    Patient["john"].name[0].family = "Doe";
    Patient["john"].name[0].given[0] = "John";
    Patient["john"].gender = "male";
    Patient["john"].birthDate = ("27/08/1967" as date => "%d/%m/%Y");
    Observation.status = "final";
    Observation.valueQuantity.value = ("11.2" as decimal);
    '''
    result = compile_and_run(source)
    if result.success:
        print(result.bundle.to_json(indent=2))
    else:
        print(result.format_errors())

Or step by step:
    from fdl import ErrorReporter, tokenize, parse, resolve

    reporter = ErrorReporter()
    statements = parse(tokenize(source, reporter), reporter)
    table = resolve(statements)
"""

from .tokens import (
    Token,
    TokenType,
    KEYWORDS,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    # Base
    AstNode,
    AstVisitor,
    # Expressions
    Expression,
    Element,
    Get,
    Set,
    Literal,
    Date,
    # Statements
    Statement,
    ExpressionStatement,
    # Helpers
    PrintVisitor,
    format_ast,
    print_ast,
)

from .errors import (
    DslError,
    LexerError,
    ParserError,
    FdlRuntimeError,
    FdlException,
    CoercionError,
    Diagnostic,
    DiagnosticKind,
    ErrorReporter,
)

from .types import (
    DeclaredType,
    TypeService,
    DEFAULT_DATE_FORMATS,
)

from .resolver import (
    PathResolver,
    PathTable,
    resolve,
)

from .runtime import (
    Interpreter,
    InterpretResult,
    interpret,
    compile_and_run,
    RunContext,
    IdentityCache,
    RootRegistry,
    ElementProvider,
    ModelElementProvider,
    ProviderError,
    UnknownType,
    FieldMissing,
    IndexOutOfOrder,
    InvalidEnumValue,
    WrongShape,
)

from .models import (
    Bundle,
    Resource,
    default_registry,
)

from .config import (
    Settings,
    load_settings,
)

from .api import (
    DefinitionLanguageAPI,
    hydrate,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'KEYWORDS',

    # Lexer
    'Lexer',
    'tokenize',

    # Parser
    'Parser',
    'parse',

    # AST
    'AstNode',
    'AstVisitor',
    'Expression',
    'Element',
    'Get',
    'Set',
    'Literal',
    'Date',
    'Statement',
    'ExpressionStatement',
    'PrintVisitor',
    'format_ast',
    'print_ast',

    # Errors
    'DslError',
    'LexerError',
    'ParserError',
    'FdlRuntimeError',
    'FdlException',
    'CoercionError',
    'Diagnostic',
    'DiagnosticKind',
    'ErrorReporter',

    # Types
    'DeclaredType',
    'TypeService',
    'DEFAULT_DATE_FORMATS',

    # Resolver
    'PathResolver',
    'PathTable',
    'resolve',

    # Runtime/Interpreter
    'Interpreter',
    'InterpretResult',
    'interpret',
    'compile_and_run',
    'RunContext',
    'IdentityCache',
    'RootRegistry',
    'ElementProvider',
    'ModelElementProvider',
    'ProviderError',
    'UnknownType',
    'FieldMissing',
    'IndexOutOfOrder',
    'InvalidEnumValue',
    'WrongShape',

    # Models
    'Bundle',
    'Resource',
    'default_registry',

    # Configuration
    'Settings',
    'load_settings',

    # API
    'DefinitionLanguageAPI',
    'hydrate',
]

__version__ = "0.1.0"
