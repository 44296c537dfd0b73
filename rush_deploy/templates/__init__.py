# rush_deploy/templates/__init__.py
"""Built-in templates for rush-deploy"""

import string
from pathlib import Path
from typing import Dict, Any, Optional

# Template directory path
TEMPLATES_DIR = Path(__file__).parent

DEPLOY_SCENARIO_TEMPLATE = "deploy-scenario.json"


def get_template_path(name: str) -> Optional[Path]:
    """
    Get path to a template file

    Args:
        name: Template file name

    Returns:
        Path to template file or None if not found
    """
    template_path = TEMPLATES_DIR / name

    if template_path.exists():
        return template_path

    return None


def render_template(name: str, variables: Dict[str, Any]) -> str:
    """
    Load a template and substitute ``${variable}`` placeholders

    Args:
        name: Template file name
        variables: Variables to substitute

    Returns:
        Rendered template

    Raises:
        FileNotFoundError: If template not found
    """
    template_path = get_template_path(name)
    if template_path is None:
        raise FileNotFoundError(f"Template not found: {name}")

    template = string.Template(template_path.read_text(encoding='utf-8'))
    return template.safe_substitute(variables)
