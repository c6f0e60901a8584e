# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Evaluation Configuration
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .core import DeviceDescriptor
from .errors import ConfigurationError, InvalidArgumentError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class EvalConfig:
    """
    Configuration for an Evaluation.

    Attributes:
        device: Default placement for values and evaluation ("cpu", "gpu:0").
        verbose: Verbosity level (0=silent ... 4=debug); None leaves the
            logger's current level alone.
        strict: Reject graphs with unsupported operations before running.
    """

    device: str = "cpu"
    verbose: Optional[int] = None
    strict: bool = True

    def __post_init__(self):
        try:
            DeviceDescriptor.parse(self.device)
        except InvalidArgumentError as e:
            raise ConfigurationError(e.message, config_key="device", config_value=self.device) from e
        if self.verbose is not None and not 0 <= self.verbose <= 4:
            raise ConfigurationError(
                "verbose must be between 0 and 4",
                config_key="verbose",
                config_value=str(self.verbose),
            )

    def get_device(self) -> DeviceDescriptor:
        """Get device descriptor."""
        return DeviceDescriptor.parse(self.device)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvalConfig":
        """
        Build a config from EVALBRIDGE_* environment variables.

        Reads EVALBRIDGE_DEVICE, EVALBRIDGE_VERBOSITY and EVALBRIDGE_STRICT;
        unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if "EVALBRIDGE_DEVICE" in env:
            kwargs["device"] = env["EVALBRIDGE_DEVICE"]

        if "EVALBRIDGE_VERBOSITY" in env:
            raw = env["EVALBRIDGE_VERBOSITY"]
            try:
                kwargs["verbose"] = int(raw)
            except ValueError:
                raise ConfigurationError(
                    "EVALBRIDGE_VERBOSITY must be an integer",
                    config_key="EVALBRIDGE_VERBOSITY",
                    config_value=raw,
                ) from None

        if "EVALBRIDGE_STRICT" in env:
            raw = env["EVALBRIDGE_STRICT"].strip().lower()
            if raw in _TRUE:
                kwargs["strict"] = True
            elif raw in _FALSE:
                kwargs["strict"] = False
            else:
                raise ConfigurationError(
                    "EVALBRIDGE_STRICT must be a boolean",
                    config_key="EVALBRIDGE_STRICT",
                    config_value=raw,
                )

        return cls(**kwargs)
