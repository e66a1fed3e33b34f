from __future__ import annotations

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

CONFIG_ENV_VAR = "RECEIPT_PROCESSOR_CONFIG"
DEFAULT_CONFIG_PATH = Path("./config.json")


class Settings(BaseModel):
    """Point values, logging and server settings. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    retailerNameMultiplier: StrictInt = Field(default=1, ge=0, description="Points per letter or digit in the retailer name.")
    roundDollarBonus: StrictInt = Field(default=50, ge=0, description="Points for a total with no cents.")
    multipleOf025Bonus: StrictInt = Field(default=25, ge=0, description="Points for a total that is a multiple of 0.25.")
    itemsBonusPerTwo: StrictInt = Field(default=5, ge=0, description="Points for every two items.")
    itemDescriptionMultiplier: Decimal = Field(
        default=Decimal("0.2"),
        ge=0,
        allow_inf_nan=False,
        description="Price multiplier for items whose trimmed description length is a multiple of 3.",
    )
    oddDayBonus: StrictInt = Field(default=6, ge=0, description="Points for an odd purchase day.")
    timeBonus: StrictInt = Field(default=10, ge=0, description="Points for a purchase between 2:00pm and 4:00pm.")
    logFilePath: StrictStr = Field(default="./logs/logs.out", description="Rotating log file location.")
    logLevel: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG",
        description="Logging level.",
    )
    host: StrictStr = Field(default="0.0.0.0", description="Address the server binds to.")
    port: StrictInt = Field(default=8080, ge=1, le=65535, description="Port the server listens on.")


DEFAULTS: Dict[str, Any] = Settings().model_dump()


def loadConfig(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the configuration mapping from defaults and an optional JSON file.

    The file is taken from ``path``, then the RECEIPT_PROCESSOR_CONFIG
    environment variable, then ./config.json if it exists.

    Args:
        path (str, optional): Explicit location of a JSON config file.

    Returns:
        dict: The validated configuration.

    Raises:
        ValueError: If the file is not a JSON object, names an unknown key
            or holds a value of the wrong type.
    """
    candidate = path or os.environ.get(CONFIG_ENV_VAR)
    if candidate is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return dict(DEFAULTS)
        candidate = str(DEFAULT_CONFIG_PATH)

    with open(candidate, "r", encoding="utf-8") as handle:
        overrides = json.load(handle)

    if not isinstance(overrides, dict):
        raise ValueError(f"Config file {candidate} must contain a JSON object.")

    return Settings.model_validate(overrides).model_dump()


CONFIG = loadConfig()
