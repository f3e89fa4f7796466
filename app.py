"""
Flask JSON API for the headline intelligence engine.
Analyzes single headlines or batches, with an optional markets-only filter.
"""
import os
import sys
import logging
from datetime import datetime
from pathlib import Path

import pytz
from flask import Flask, jsonify, request
from pydantic import ValidationError

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

# Load environment variables from .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import config
from utils import setup_logging, get_env_bool
from src.headlines import HeadlinePipeline, mentioned_symbols
from src.headlines.lexicon import lexicon_stats

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)

pipeline = HeadlinePipeline()


def parse_bool_param(value, default=False):
    """Parse a parameter that could be a bool, string, or None."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def validation_error(e: ValidationError):
    return jsonify({"error": "invalid headline", "details": e.errors(include_url=False, include_context=False)}), 400


@app.route('/api/health')
def health_check():
    """Health check endpoint for deployment monitoring."""
    now = datetime.now(pytz.UTC)
    return jsonify({
        "status": "healthy",
        "timestamp": now.isoformat(),
        "news_refresh_seconds": config.NEWS_REFRESH_SECONDS,
        "max_instruments_per_headline": config.MAX_INSTRUMENTS_PER_HEADLINE,
    })


@app.route('/api/headlines/analyze', methods=['POST'])
def analyze_headline():
    """Analyze one headline record."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "expected a JSON object"}), 400
        analysis = pipeline.analyze(data)
        return jsonify(analysis.to_dict())
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        logger.error(f"Headline analysis failed: {e}")
        return jsonify({"error": str(e)}), 500


@app.route('/api/headlines/batch', methods=['POST'])
def analyze_batch():
    """Analyze a batch: {"headlines": [...], "markets_only": bool}."""
    try:
        data = request.get_json(silent=True) or {}
        headlines = data.get('headlines') if isinstance(data, dict) else None
        if not isinstance(headlines, list):
            return jsonify({"error": "'headlines' must be a list"}), 400

        markets_only = parse_bool_param(data.get('markets_only'), default=False)
        analyses, stats = pipeline.process(headlines, markets_only=markets_only)
        mentioned = mentioned_symbols(analyses, limit=config.MENTIONED_SYMBOLS_LIMIT)

        return jsonify({
            "analyses": [a.to_dict() for a in analyses],
            "stats": stats.to_dict(),
            "mentioned_symbols": [{"symbol": s, "count": c} for s, c in mentioned],
        })
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        logger.error(f"Batch analysis failed: {e}")
        return jsonify({"error": str(e)}), 500


@app.route('/api/headlines/lexicon')
def get_lexicon():
    """Sizes of the static lookup tables."""
    try:
        return jsonify(lexicon_stats())
    except Exception as e:
        return jsonify({"error": str(e)}), 500


if __name__ == '__main__':
    port = config.PORT
    debug = get_env_bool("FLASK_DEBUG", False)

    print(f"\n{'='*60}")
    print("HEADLINE INTELLIGENCE - JSON API")
    print(f"{'='*60}")
    print(f"\nListening on: http://localhost:{port}")
    print("\nPress Ctrl+C to stop the server")
    print(f"{'='*60}\n")

    app.run(host='0.0.0.0', port=port, debug=debug, threaded=True)
