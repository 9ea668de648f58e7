"""
FDL Runtime - Tree-walking interpreter over an element provider.

This module provides:
- Interpreter: Evaluates resolved statements into a bundle
- RunContext: Identity cache, root registry and path table of one run
- ElementProvider: The interface for creating and filling domain objects
- ModelElementProvider: ElementProvider over pydantic models
"""

from .context import (
    IdentityCache,
    RootRegistry,
    RunContext,
    create_context,
)

from .provider import (
    ElementProvider,
    ProviderError,
    UnknownType,
    FieldMissing,
    IndexOutOfOrder,
    InvalidEnumValue,
    WrongShape,
)

from .model_provider import (
    FieldKind,
    FieldShape,
    ModelElementProvider,
    model_shapes,
)

from .interpreter import (
    Interpreter,
    InterpretResult,
    interpret,
    compile_and_run,
)

__all__ = [
    # Context
    'IdentityCache',
    'RootRegistry',
    'RunContext',
    'create_context',

    # Providers
    'ElementProvider',
    'ProviderError',
    'UnknownType',
    'FieldMissing',
    'IndexOutOfOrder',
    'InvalidEnumValue',
    'WrongShape',
    'FieldKind',
    'FieldShape',
    'ModelElementProvider',
    'model_shapes',

    # Interpreter
    'Interpreter',
    'InterpretResult',
    'interpret',
    'compile_and_run',
]
