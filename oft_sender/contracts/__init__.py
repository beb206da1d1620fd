"""Contract ABIs shipped with the OFT sender."""

from importlib import resources
from typing import Any, Dict, List
import json

OFT_ABI_FILE = "oft_abi.json"


def load_contract_abi(filename: str = OFT_ABI_FILE) -> List[Dict[str, Any]]:
    """Load an ABI JSON file from the contracts package."""
    with resources.files(__package__).joinpath(filename).open("r", encoding="utf-8") as fh:
        return json.load(fh)


__all__ = ["OFT_ABI_FILE", "load_contract_abi"]
