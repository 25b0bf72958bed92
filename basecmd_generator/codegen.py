import logging
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
    ext as jinja2_extensions,
)

from basecmd_generator.codegen_utils import format_go_code_using_gofmt
from basecmd_generator.constants import OutputLayout, TemplateNames
from basecmd_generator.domain.models import TemplateData
from basecmd_generator.domain.naming import (
    Inflector,
    to_camel_case,
    to_capital_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from basecmd_generator.exceptions import CodeGenerationError, raise_code_generation_error


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"


def setup_jinja_env(inflector: Optional[Inflector] = None) -> Environment:
    """Sets up and returns the Jinja2 environment for the Go templates."""
    inflector = inflector or Inflector()
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # Go sources must not be HTML escaped
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        extensions=[
            jinja2_extensions.loopcontrols,
        ],
    )
    env.filters["pluralize"] = inflector.plural
    env.filters["singularize"] = inflector.singular
    env.filters["snake"] = to_snake_case
    env.filters["pascal"] = to_pascal_case
    env.filters["camel"] = to_camel_case
    env.filters["kebab"] = to_kebab_case
    env.filters["capital"] = to_capital_case
    return env


def render_template(env: Environment, template_name: str, context: Dict[str, Any]) -> str:
    """Renders a template, wrapping Jinja2 failures in CodeGenerationError."""
    try:
        template = env.get_template(template_name)
        return template.render(context)
    except TemplateError as e:
        raise CodeGenerationError(
            f"Error rendering template '{template_name}': {e}",
            template=template_name,
        ) from e


def generate_file_from_template(
    env: Environment,
    template_name: str,
    context: Dict[str, Any],
    output_path: Path,
    format_code: bool = True,
) -> Path:
    """Renders a Jinja template and saves the output to the specified path."""
    rendered_content = render_template(env, template_name, context)
    if format_code and output_path.suffix == OutputLayout.GO_EXTENSION:
        rendered_content = format_go_code_using_gofmt(output_path, rendered_content)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(rendered_content)
    except OSError as e:
        logger.error(f"Error writing '{output_path}': {e}")
        raise_code_generation_error(
            f"Could not write generated file: {e}",
            template=template_name,
            output_path=output_path,
        )
    logger.debug(f"Generated file: {output_path}")
    return output_path


def module_file_plan(data: TemplateData, app_path: Path, include_validator: bool = False) -> Dict[str, Path]:
    """
    Output path of every template rendered for one module.

    The model lives in ``app/models/<model_snake>.go``; the service, controller
    and module files live in ``app/<dir_name>/``.
    """
    naming = data.naming
    module_dir = app_path / naming.dir_name
    plan: Dict[str, Path] = {
        TemplateNames.MODEL: app_path / OutputLayout.MODELS_DIR / f"{naming.model_snake}{OutputLayout.GO_EXTENSION}",
    }
    for template_name, file_name in TemplateNames.MODULE_FILES.items():
        plan[template_name] = module_dir / file_name
    if include_validator:
        plan[TemplateNames.VALIDATOR] = module_dir / "validator.go"
    return plan


def render_module_files(
    env: Environment,
    data: TemplateData,
    app_path: Path,
    include_validator: bool = False,
) -> Dict[Path, str]:
    """Render every file of a module in memory, keyed by output path."""
    context = data.to_context()
    return {
        path: render_template(env, template_name, context)
        for template_name, path in module_file_plan(data, app_path, include_validator).items()
    }
