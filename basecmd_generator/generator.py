"""
Generate and destroy orchestration.

Ties the domain pipeline (naming, field parsing, template data) to the
renderer, the file system and the module registry.
"""

import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from basecmd_generator.codegen import (
    generate_file_from_template,
    module_file_plan,
    render_module_files,
    setup_jinja_env,
)
from basecmd_generator.colored_logging import log_highlight, log_progress, log_success
from basecmd_generator.config_validation import ToolConfigSchema
from basecmd_generator.constants import OutputLayout
from basecmd_generator.domain.models import GenerationResult, TemplateData
from basecmd_generator.domain.naming import Inflector, NamingConvention, build_naming_convention
from basecmd_generator.domain.template_data import assemble_template_data
from basecmd_generator.exceptions import GeneratorError, MissingModuleError
from basecmd_generator.init_patcher import MarkerInitFilePatcher, ModuleRegistry
from basecmd_generator.validators import FieldDefinitionValidator, ModelNameValidator

logger = logging.getLogger(__name__)


class ModuleGenerator:
    """
    Generates and destroys application modules.

    Args:
        config: Validated tool configuration
        inflector: Pluralization service; created once and shared
        registry: Where modules get registered; defaults to the marker
            patcher on the configured init file
    """

    def __init__(
        self,
        config: ToolConfigSchema,
        inflector: Optional[Inflector] = None,
        registry: Optional[ModuleRegistry] = None,
    ):
        self.config = config
        self.inflector = inflector or Inflector()
        self.env = setup_jinja_env(self.inflector)
        self.registry = registry or MarkerInitFilePatcher(
            config.init_path, module_path=config.module_path, env=self.env
        )

    @property
    def app_path(self) -> Path:
        return self.config.app_path

    def build(self, model_name: str, field_tokens: Sequence[str]) -> TemplateData:
        """Validate the input and assemble the template data."""
        validation = ModelNameValidator.validate(model_name)
        validation.merge(
            FieldDefinitionValidator.validate_tokens(field_tokens, model_name, inflector=self.inflector)
        )
        for warning in validation.warnings:
            logger.warning(warning)
        validation.raise_if_invalid()

        return assemble_template_data(
            model_name,
            field_tokens,
            inflector=self.inflector,
            module_path=self.config.module_path,
        )

    def preview(self, model_name: str, field_tokens: Sequence[str]) -> Dict[Path, str]:
        """Render every file of the module without writing anything."""
        data = self.build(model_name, field_tokens)
        return render_module_files(self.env, data, self.app_path, self.config.generate_validator)

    def generate(self, model_name: str, field_tokens: Sequence[str]) -> GenerationResult:
        """
        Generate a module and register it in the init file.

        Files already written stay on disk when a later step fails.
        """
        data = self.build(model_name, field_tokens)
        naming = data.naming
        result = GenerationResult(model_name=naming.model)

        log_progress(logger, f"Generating module '{naming.package_name}' for model {naming.model}...")
        log_highlight(logger, f"{len(data.fields)} fields, table '{naming.table_name}', route '{naming.route_path}'")

        context = data.to_context()
        plan = module_file_plan(data, self.app_path, self.config.generate_validator)
        try:
            for template_name, output_path in plan.items():
                generate_file_from_template(
                    self.env,
                    template_name,
                    context,
                    output_path,
                    format_code=self.config.format_code,
                )
                result.written_files.append(output_path)
                logger.info(f"Created {self._display_path(output_path)}")

            result.init_file_patched = self.registry.insert_module(naming)
        except GeneratorError:
            if result.written_files:
                logger.error(
                    "Generation stopped; these files were already written: "
                    + ", ".join(self._display_path(p) for p in result.written_files)
                )
            raise

        if result.init_file_patched:
            logger.info(f"Registered module '{naming.package_name}' in {self.config.init_file}")
        log_success(logger, f"Module '{naming.package_name}' generated successfully.")
        return result

    def destroy(self, model_name: str) -> bool:
        """
        Remove a generated module and unregister it.

        Raises:
            MissingModuleError: If the module directory does not exist
        """
        ModelNameValidator.validate(model_name).raise_if_invalid()
        naming = build_naming_convention(model_name, self.inflector)

        module_dir = self.app_path / naming.dir_name
        if not module_dir.is_dir():
            raise MissingModuleError(
                f"Module '{naming.package_name}' does not exist",
                module=naming.package_name,
                path=module_dir,
            )

        log_progress(logger, f"Removing module '{naming.package_name}'...")
        shutil.rmtree(module_dir)
        logger.info(f"Removed {self._display_path(module_dir)}")

        model_file = self.model_file(naming)
        if model_file.exists():
            model_file.unlink()
            logger.info(f"Removed {self._display_path(model_file)}")
        else:
            logger.warning(f"Model file {self._display_path(model_file)} not found, skipping")

        if self.registry.remove_module(naming):
            logger.info(f"Unregistered module '{naming.package_name}' from {self.config.init_file}")

        log_success(logger, f"Module '{naming.package_name}' destroyed successfully.")
        return True

    def model_file(self, naming: NamingConvention) -> Path:
        return self.app_path / OutputLayout.MODELS_DIR / f"{naming.model_snake}{OutputLayout.GO_EXTENSION}"

    def existing_modules(self, model_names: Sequence[str]) -> List[NamingConvention]:
        """Naming conventions of the given models whose module directory exists."""
        found = []
        for name in model_names:
            naming = build_naming_convention(name, self.inflector)
            if (self.app_path / naming.dir_name).is_dir():
                found.append(naming)
        return found

    def _display_path(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.config.root_path))
        except ValueError:
            return str(path)
