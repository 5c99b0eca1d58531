"""Component source templates — one render function per framework variant.

Each renderer takes (component_name, markup, instructions) and returns a
complete source file. The markup is inserted verbatim (already indented for
its position inside ``return (...)``); the component name is used verbatim.
Non-empty instructions become a single ``//`` comment right after the imports.
"""

from __future__ import annotations

from enum import Enum
from string import Template
from typing import Callable, Dict, Optional, Union


class FrameworkVariant(str, Enum):
    MUI_TSX = "mui-tsx"
    MUI_JSX = "mui-jsx"
    STYLED_COMPONENTS = "styled-components"
    VANILLA_JSX = "vanilla-jsx"

    @classmethod
    def resolve(cls, value: Union[str, "FrameworkVariant", None]) -> "FrameworkVariant":
        """Map a selector to a variant; None or unrecognized values fall back to vanilla-jsx."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.VANILLA_JSX


DEFAULT_VARIANT = FrameworkVariant.VANILLA_JSX

_MUI_TSX = Template("""\
import React from 'react';
import { Box, BoxProps } from '@mui/material';
$instructions
interface ${name}Props extends BoxProps {
  className?: string;
}

export const $name: React.FC<${name}Props> = ({ className, ...props }) => {
  return (
    <Box className={className} {...props}>
$markup
    </Box>
  );
};

export default $name;
""")

_MUI_JSX = Template("""\
import React from 'react';
import { Box } from '@mui/material';
$instructions
export const $name = ({ className, ...props }) => {
  return (
    <Box className={className} {...props}>
$markup
    </Box>
  );
};

export default $name;
""")

_STYLED_COMPONENTS = Template("""\
import React from 'react';
import styled from 'styled-components';
$instructions
const Container = styled.div`
  /* Add your styles here */
`;

export const $name = ({ className }) => {
  return (
    <Container className={className}>
$markup
    </Container>
  );
};

export default $name;
""")

_VANILLA_JSX = Template("""\
import React from 'react';
$instructions
interface ${name}Props {
  className?: string;
}

export const $name: React.FC<${name}Props> = ({ className }) => {
  return (
    <div className={className}>
$markup
    </div>
  );
};

export default $name;
""")


def _instructions_comment(instructions: Optional[str]) -> str:
    return f"\n// {instructions}" if instructions else ""


def _renderer(template: Template) -> Callable[[str, str, Optional[str]], str]:
    def render(component_name: str, markup: str, instructions: Optional[str] = None) -> str:
        return template.substitute(
            name=component_name,
            markup=markup,
            instructions=_instructions_comment(instructions),
        )
    return render


render_mui_tsx = _renderer(_MUI_TSX)
render_mui_jsx = _renderer(_MUI_JSX)
render_styled_components = _renderer(_STYLED_COMPONENTS)
render_vanilla_jsx = _renderer(_VANILLA_JSX)

RENDERERS: Dict[FrameworkVariant, Callable[[str, str, Optional[str]], str]] = {
    FrameworkVariant.MUI_TSX: render_mui_tsx,
    FrameworkVariant.MUI_JSX: render_mui_jsx,
    FrameworkVariant.STYLED_COMPONENTS: render_styled_components,
    FrameworkVariant.VANILLA_JSX: render_vanilla_jsx,
}


def render_component(
    variant: Union[str, FrameworkVariant, None],
    component_name: str,
    markup: str,
    instructions: Optional[str] = None,
) -> str:
    """Wrap emitted markup in the boilerplate of the selected variant."""
    return RENDERERS[FrameworkVariant.resolve(variant)](component_name, markup, instructions)
