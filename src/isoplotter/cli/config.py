"""
Configuration file support for the isoplotter CLI.

Supports YAML and JSON config files with CLI argument override.

Example config (YAML):
```yaml
data: expression.csv
annotations: gene_annotations.csv
metadata: samples.csv
genes: [SPP1]
output: results/spp1.csv
plot: results/spp1.png
options:
  plot_title: SPP1
  plot_subtitle: Isoforms Frequency
```
"""

import json
from argparse import Namespace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

# Top-level keys holding file paths -> argparse destination
PATH_KEYS = {
    'data': 'data',
    'annotations': 'annotations',
    'metadata': 'metadata',
    'output': 'output',
    'plot': 'plot',
    'long_output': 'long_output',
}

# Top-level keys holding identifier lists -> argparse destination
LIST_KEYS = {
    'samples': 'samples',
    'genes': 'genes',
    'isoforms': 'isoforms',
}

# options.<key> -> (argparse destination, config value -> argparse value)
OPTION_KEYS: Dict[str, tuple[str, Callable[[Any], Any]]] = {
    'to_fraction': ('raw', lambda v: not bool(v)),
    'return_all': ('all_samples', bool),
    'verbose': ('quiet', lambda v: not bool(v)),
    'plot_title': ('title', str),
    'plot_subtitle': ('subtitle', str),
    'sample_id_column': ('sample_id_column', str),
}

# Short flags used by the subset command
SHORT_TO_LONG = {
    'd': 'data',
    'a': 'annotations',
    'm': 'metadata',
    's': 'samples',
    'g': 'genes',
    'i': 'isoforms',
    'o': 'output',
    'p': 'plot',
    'q': 'quiet',
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    try:
        with open(config_path, 'r') as f:
            if suffix in ('.yaml', '.yml'):
                config = yaml.safe_load(f)
            elif suffix == '.json':
                config = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported config format: {suffix}. "
                    f"Use .yaml, .yml, or .json"
                )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a dictionary/mapping at top level")

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Check config keys and value types.

    Raises:
        ValueError: On unknown keys or wrongly typed values
    """
    known = set(PATH_KEYS) | set(LIST_KEYS) | {'options'}
    unknown = sorted(set(config) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}. Valid keys: {sorted(known)}")

    for key in LIST_KEYS:
        value = config.get(key)
        if value is not None and not isinstance(value, (str, list)):
            raise ValueError(f"'{key}' must be a string or a list of strings")

    options = config.get('options', {}) or {}
    if not isinstance(options, dict):
        raise ValueError("'options' must be a mapping")

    unknown_opts = sorted(set(options) - set(OPTION_KEYS))
    if unknown_opts:
        raise ValueError(
            f"Unknown options: {unknown_opts}. Valid options: {sorted(OPTION_KEYS)}"
        )


def _explicit_args(cli_args: Optional[List[str]]) -> set[str]:
    """Argparse destinations the user set explicitly on the command line."""
    explicit = set()
    for arg in cli_args or []:
        if arg.startswith('--'):
            name = arg[2:].split('=', 1)[0].replace('-', '_')
            explicit.add(name)
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in SHORT_TO_LONG:
            explicit.add(SHORT_TO_LONG[arg[1]])
    return explicit


def _merge_value(cli_value: Any, config_value: Any, was_explicitly_set: bool) -> Any:
    """
    CLI args override config if explicitly set; otherwise config wins over
    the CLI default.
    """
    if was_explicitly_set:
        return cli_value
    if config_value is not None:
        return config_value
    return cli_value


def merge_config_with_args(
    config: Dict[str, Any],
    args: Namespace,
    cli_args: Optional[List[str]] = None,
) -> Namespace:
    """
    Merge config file values with CLI arguments.

    Priority (highest to lowest):
    1. Explicitly provided CLI arguments
    2. Config file values
    3. CLI argument defaults

    Parameters:
        config: Configuration dictionary from load_config()
        args: Parsed CLI arguments
        cli_args: Raw CLI arguments list (for detecting explicit values).
                  If None, all args are treated as defaults.

    Returns:
        New Namespace with merged values
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    for key, dest in PATH_KEYS.items():
        if key in config:
            value = config[key]
            value = Path(value) if value is not None else None
            setattr(merged, dest, _merge_value(getattr(merged, dest, None), value, dest in explicit))

    for key, dest in LIST_KEYS.items():
        if key in config:
            value = config[key]
            if isinstance(value, str):
                value = [value]
            elif value is not None:
                value = [str(v) for v in value]
            setattr(merged, dest, _merge_value(getattr(merged, dest, None), value, dest in explicit))

    for key, value in (config.get('options') or {}).items():
        dest, convert = OPTION_KEYS[key]
        value = convert(value) if value is not None else None
        setattr(merged, dest, _merge_value(getattr(merged, dest, None), value, dest in explicit))

    return merged
