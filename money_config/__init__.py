"""
money_config -- single public entrypoint for money-kernel configuration.

Responsibility:
    Provides the ONLY way to obtain money-kernel configuration at runtime
    through ``get_active_config()``.  Returns a frozen ``MoneyConfig``;
    ``build_money_context()`` turns it into the kernel's ``MoneyContext``.

Architecture position:
    Configuration -- YAML-driven policy.  This package sits above
    ``money_kernel``.  The kernel MUST NEVER import from ``money_config``;
    bridges in this package translate configuration into kernel inputs.

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - Deterministic loading: the same YAML always produces the same
      ``MoneyConfig`` checksum.
    - The loaded set's ``config_id`` must match the requested one.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set named ``config_id``.
    - ``ValueError`` / ``KeyError`` -- schema or structural validation
      failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``MONEY_CONFIG_TRACE`` log entry containing the config_id, version,
    checksum, rounding mode, precision and currency count.
"""

from __future__ import annotations

import logging
from pathlib import Path

from money_config.bridges import build_money_context
from money_config.loader import compute_checksum, load_yaml_file, parse_money_config
from money_config.schema import CurrencyDef, MoneyConfig

_logger = logging.getLogger("money_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

__all__ = [
    "CurrencyDef",
    "MoneyConfig",
    "build_money_context",
    "get_active_config",
]


def get_active_config(
    config_id: str = "default",
    config_dir: Path | None = None,
) -> MoneyConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_id: Name of the configuration set; read from
            ``<config_dir>/<config_id>.yaml``.
        config_dir: Override path to configuration sets directory.
            Defaults to money_config/sets/.

    Returns:
        MoneyConfig -- frozen, validated configuration.

    Raises:
        FileNotFoundError: If the directory or configuration set is missing.
        ValueError: If configuration validation fails.
        KeyError: If a required key is missing.
    """
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    if not sets_dir.is_dir():
        raise FileNotFoundError(f"Configuration sets directory not found: {sets_dir}")

    path = sets_dir / f"{config_id}.yaml"
    if not path.is_file():
        raise FileNotFoundError(
            f"No configuration set found for config_id='{config_id}' in {sets_dir}"
        )

    data = load_yaml_file(path)
    config = parse_money_config(data, checksum=compute_checksum(data))
    if config.config_id != config_id:
        raise ValueError(
            f"Configuration file {path.name} declares config_id="
            f"'{config.config_id}', expected '{config_id}'"
        )

    _logger.info(
        "MONEY_CONFIG_TRACE",
        extra={
            "trace_type": "MONEY_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "rounding_mode": config.rounding_mode,
            "precision": config.precision,
            "currency_count": len(config.currencies),
        },
    )
    return config
