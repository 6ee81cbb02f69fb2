# client/download.py
import os
import requests
from urllib.parse import quote

from filesplit import log
from filesplit.core.store import write_all
from filesplit.errors import TransferError


def download_parts(names, dest_dir, config):
    """
    Fetches named parts from a storage node into dest_dir.

    Parts are fetched in the given order and never re-sorted, so the
    returned paths can go straight to merge_files.

    Args:
        names (List[str]): Ordered part names as stored on the node.
        dest_dir (str): Local directory for the downloaded parts.
        config (TransferConfig): Node URL, timeout and overwrite policy.

    Returns:
        List[str]: Local part paths in the same order as names.
    """
    os.makedirs(dest_dir, exist_ok=True)
    paths = []

    for name in names:
        try:
            r = requests.get(f"{config.node_url}/part/{quote(name, safe='')}", timeout=config.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise TransferError(f"failed to download {name} from {config.node_url}: {e}") from e

        part_path = os.path.join(dest_dir, os.path.basename(name))
        write_all(part_path, r.content, exclusive=not config.overwrite)
        log(f"Downloaded {name} from {config.node_url}", context="DOWNLOAD")
        paths.append(part_path)

    return paths
