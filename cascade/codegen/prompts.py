"""AI-assisted generation prompt templates.

Used by the AI proxy client: the system prompt fixes the role and framework
conventions, the user prompt carries the component name, the variant and the
full Figma node JSON.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

AI_SYSTEM_PROMPT = """\
You are an expert React developer specializing in converting Figma designs to \
production-ready React components.
Generate clean, maintainable, and properly typed React components based on \
Figma design data.

Framework preferences:
- mui-tsx: Use Material-UI (MUI) with TypeScript
- mui-jsx: Use Material-UI (MUI) with JavaScript
- vanilla-jsx: Use plain React with inline styles (TypeScript)
- styled-components: Use styled-components library

Important guidelines:
1. Generate ONLY the component code, no explanations
2. Use proper TypeScript types when applicable
3. Follow React best practices
4. Use semantic HTML
5. Implement responsive design where appropriate
6. Match the Figma design's layout, spacing, colors, and typography as closely as possible
7. Use flexbox/grid for layouts that have auto-layout properties
8. Extract reusable styles and patterns"""

AI_USER_PROMPT_TEMPLATE = """\
Convert this Figma component to a React component:

Component Name: {component_name}
Framework: {framework}

Figma Component Data:
{node_json}

{additional}

Generate a complete, production-ready React component. Include all necessary \
imports and proper structure."""


def build_user_prompt(
    node_data: Dict[str, Any],
    framework: str,
    component_name: str,
    additional_instructions: Optional[str] = None,
) -> str:
    additional = (
        f"Additional Requirements:\n{additional_instructions}\n"
        if additional_instructions else ""
    )
    return AI_USER_PROMPT_TEMPLATE.format(
        component_name=component_name,
        framework=framework,
        node_json=json.dumps(node_data, indent=2, ensure_ascii=False),
        additional=additional,
    )
