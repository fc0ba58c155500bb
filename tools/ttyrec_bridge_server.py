import sys
import base64
import os
import io
import argparse
import importlib


# Fail loudly and helpfully if required Python packages are missing.
def _require_modules(mods):
    missing = []
    for m in mods:
        try:
            importlib.import_module(m)
        except Exception:
            missing.append(m)
    if missing:
        print("\nERROR: Missing required Python package(s): {}".format(', '.join(missing)))
        print("Install them with:")
        print("  python -m pip install -r tools/requirements.txt")
        print("If you don't have Python, download it from https://www.python.org/downloads/")
        sys.exit(1)


_require_modules(['flask'])

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from flask import Flask, request, send_file, jsonify

from TREC.FMM.constants import MIME_TYPE
from TREC.FEM.editor_bridge import parse_ttyrec, serialize_ttyrec
from TREC.errors import FrameDecodeError, FrameEncodeError

HOST = '127.0.0.1'
PORT = 5000


def create_app():
    app = Flask(__name__)

    @app.route('/ttyrec-bridge/parse', methods=['POST'])
    def parse():
        if 'ttyrec' not in request.files:
            return jsonify({'error': 'missing file field `ttyrec`'}), 400
        f = request.files['ttyrec']
        name = f.filename or 'upload'
        try:
            return jsonify(parse_ttyrec(f.read()))
        except FrameDecodeError as e:
            print(f'[parse] {name}: {e}')
            return jsonify({'error': f'Error reading file: {name}: {e}',
                            'kind': type(e).__name__}), 400

    @app.route('/ttyrec-bridge/save', methods=['POST'])
    def save():
        document = request.get_json(silent=True)
        if not isinstance(document, dict):
            return jsonify({'error': 'expected a JSON object with `frames`'}), 400
        try:
            result = serialize_ttyrec(document)
        except (FrameEncodeError, TypeError, ValueError) as e:
            print(f'[save] {e}')
            return jsonify({'error': f'Error saving recording: {e}',
                            'kind': type(e).__name__}), 400
        data = io.BytesIO(base64.b64decode(result['ttyrec_b64']))
        return send_file(data, mimetype=MIME_TYPE, as_attachment=True,
                         download_name=result['filename'])

    @app.route('/ttyrec-bridge/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    return app


def main():
    parser = argparse.ArgumentParser(description='ttyrec editor bridge server')
    parser.add_argument('--host', default=HOST, help=f'listen address (default: {HOST})')
    parser.add_argument('--port', type=int, default=PORT, help=f'listen port (default: {PORT})')
    args = parser.parse_args()

    print("=" * 60)
    print("ttyrec editor bridge server")
    print("=" * 60)
    print(f"Listening on http://{args.host}:{args.port}/ttyrec-bridge/")
    print("=" * 60)

    create_app().run(host=args.host, port=args.port)


if __name__ == '__main__':
    main()
