import os
import requests

from filesplit import log
from filesplit.errors import TransferError


def upload_parts(parts, config):
    """
    Pushes local part files to a storage node, one at a time, in order.

    Args:
        parts (List[str]): Ordered part paths, as returned by split_file.
        config (TransferConfig): Node URL and request timeout.

    Returns:
        Dict[str, str]: Part name -> node URL, in upload order.
    """
    placement = {}

    for part_path in parts:
        name = os.path.basename(part_path)
        try:
            with open(part_path, "rb") as part_file:
                response = requests.post(
                    f"{config.node_url}/store",
                    files={"part": part_file},
                    data={"part_name": name},
                    timeout=config.timeout
                )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise TransferError(f"upload failed for {name}: {e}") from e

        log(f"Uploaded {name} → {config.node_url}", context="UPLOAD")
        placement[name] = config.node_url

    return placement
