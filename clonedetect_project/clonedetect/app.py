# clonedetect/app.py
from flask import Flask, request, jsonify

from clonedetect.config import (
    REFERENCE_DOMAINS_PATH, SIMILARITY_THRESHOLD, HOST, PORT, MSG_INTERNAL_ERROR
)
from clonedetect.domain_utils import load_reference_domains
from clonedetect.engine import CloneDetectionEngine, InputError

# -------------------------
# Flask setup
# -------------------------
app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024

# -------------------------
# Reference domains + engine
# -------------------------
try:
    reference = load_reference_domains(REFERENCE_DOMAINS_PATH)
    engine = CloneDetectionEngine(reference, threshold=SIMILARITY_THRESHOLD)
    app.logger.info("Loaded %d reference domains from %s", len(reference), REFERENCE_DOMAINS_PATH)
except (Exception, SystemExit) as e:
    engine = None
    app.logger.exception("Failed to load reference domains from %s: %s", REFERENCE_DOMAINS_PATH, e)


def _suspect_url_from_request():
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body.get("suspect_url")
    return request.form.get("suspect_url")


# -------------------------
# Clone check API
# -------------------------
@app.route("/check-clone", methods=["POST"])
def check_clone():
    if engine is None:
        return jsonify({"error": "Reference domains not loaded"}), 500
    try:
        suspect_url = _suspect_url_from_request()
        app.logger.info("Incoming check for %r", suspect_url)
        verdict = engine.detect(suspect_url)
    except InputError as e:
        return jsonify({"error": e.message}), 400
    except Exception as e:
        app.logger.exception("Error processing request: %s", e)
        return jsonify({"error": MSG_INTERNAL_ERROR}), 500
    return jsonify(verdict.to_dict())


# -------------------------
# Entry point
# -------------------------
if __name__ == "__main__":
    print("🚀 Starting CloneDetect Flask server...")
    app.run(host=HOST, port=PORT)
