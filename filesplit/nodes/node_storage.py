import shutil
import os
from flask import Flask, request, send_file, jsonify

from filesplit import log
from filesplit.core.store import write_all

# Directory where parts will be stored
STORAGE_DIR = os.getenv("FILESPLIT_STORAGE_DIR", os.path.abspath("node_storage"))


def _safe_name(name):
    return bool(name) and os.path.basename(name) == name and name not in (".", "..")


def create_app(storage_dir=None):
    storage_dir = os.path.abspath(storage_dir or STORAGE_DIR)
    os.makedirs(storage_dir, exist_ok=True)

    app = Flask(__name__)
    app.config["STORAGE_DIR"] = storage_dir

    @app.route('/store', methods=['POST'])
    def store_part():
        """
        Receives and stores a part.
        Expects 'part_name' as form field and the file as 'part'.
        """
        name = request.form.get('part_name')
        part = request.files.get('part')

        if not name or not part:
            return jsonify({"error": "Missing part_name or part"}), 400

        if not _safe_name(name):
            return jsonify({"error": f"Invalid part name {name}"}), 400

        try:
            write_all(os.path.join(storage_dir, name), part.read(), exclusive=True)
        except FileExistsError:
            log(f"Refused to overwrite {name}", context="NODE")
            return jsonify({"error": f"{name} already exists"}), 409

        log(f"Stored {name}", context="NODE")
        return jsonify({"status": "stored", "part_name": name})

    @app.route('/status', methods=['GET'])
    def node_status():
        """
        Returns current free disk space and number of stored parts.
        """
        total, used, free = shutil.disk_usage(storage_dir)
        parts = [
            name for name in os.listdir(storage_dir)
            if os.path.isfile(os.path.join(storage_dir, name))
        ]
        return jsonify({
            "free_mb": round(free / (1024 * 1024), 2),
            "part_count": len(parts)
        })

    @app.route('/part/<name>', methods=['GET'])
    def get_part(name):
        """
        Serves a part back to the client.
        """
        part_path = os.path.join(storage_dir, name)
        if not _safe_name(name) or not os.path.isfile(part_path):
            return jsonify({"error": "Part not found"}), 404
        return send_file(part_path, as_attachment=True, download_name=name)

    @app.route('/part/<name>', methods=['DELETE'])
    def delete_part(name):
        """
        Deletes a part from local storage.
        """
        part_path = os.path.join(storage_dir, name)
        if _safe_name(name) and os.path.isfile(part_path):
            os.remove(part_path)
            log(f"Deleted {name}", context="NODE")
            return jsonify({"status": "deleted", "part_name": name})
        return jsonify({"error": "Part not found"}), 404

    @app.route('/')
    def index():
        return "Part storage node is running", 200

    return app


if __name__ == '__main__':
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument('--port', type=int, default=5001, help='Port for this node to run on')
    parser.add_argument('--storage-dir', default=STORAGE_DIR)
    args = parser.parse_args()

    create_app(args.storage_dir).run(host='0.0.0.0', port=args.port)
