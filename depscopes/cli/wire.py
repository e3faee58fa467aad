"""Wire command implementation.

Loads a build model, applies the dependency-scopes plugin, realizes every
configuration and exports the resulting configuration graph.
"""

import logging
from pathlib import Path

from depscopes.errors import ConfigurationError
from depscopes.export.dot import export_dot
from depscopes.export.json import export_json
from depscopes.runtime.model_loader import build_model, load_model_spec, load_scopes_config

logger = logging.getLogger("depscopes.cli.wire")


def wire_command(args) -> int:
    """Execute wire command.

    Args:
        args: Parsed command-line arguments containing:
            - model: Build model file or inline TOML/JSON
            - output: Output file path
            - format: Export format (json or dot)
            - config: Optional scopes configuration overriding the model's

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        output_path = Path(args.output)
        export_format = getattr(args, "format", "json")
        config_arg = getattr(args, "config", None)

        spec = load_model_spec(args.model)
        config = load_scopes_config(config_arg) if config_arg else None
        build = build_model(spec, config)

        logger.info("Output path: %s", output_path)
        logger.info("Format: %s", export_format)

        if export_format == "dot":
            if not export_dot(build, output_path):
                logger.error("DOT export requires pydot or pygraphviz")
                return 1
        else:
            export_json(build, output_path)
        return 0

    except ConfigurationError as e:
        logger.error("Build configuration failed: %s", e)
        return 1
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Wire command failed: %s", e, exc_info=True)
        return 1
