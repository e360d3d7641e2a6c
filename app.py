"""
Flask web UI for the positions-by-target table.

Serves the collapsible positions table and turns header and chevron clicks
into sort and expand events on one shared table controller.
"""
import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify

import config
from utils import setup_logging
from allocation.data import load_positions, load_targets
from allocation.portfolio import (
    DisplayTargetState,
    build_display_targets,
    build_position_table,
)
from allocation.tables import CollapsibleTable, TableRenderer

logger = logging.getLogger(__name__)

app = Flask(__name__)
renderer = TableRenderer()

# Shared table state; Flask may serve requests on several threads
_lock = threading.Lock()
table_state: Dict[str, Any] = {
    "rows": [],
    "total_value": 0.0,
    "table": None,
    "loaded_at": None,
}


def load_table(previous: Optional[CollapsibleTable] = None) -> None:
    """(Re)load positions and targets, keeping the sort and expansion state."""
    positions = load_positions(config.POSITIONS_FILE)
    targets = load_targets(config.TARGETS_FILE)
    total_value, rows = build_display_targets(
        targets,
        positions,
        unallocated_key=config.UNALLOCATED_KEY,
        unallocated_name=config.UNALLOCATED_NAME,
    )
    table_state["rows"] = rows
    table_state["total_value"] = total_value
    table_state["table"] = build_position_table(
        total_value,
        config.CURRENCY_SYMBOL,
        sort_state=previous.sort_state if previous else None,
        expansion=previous.expansion if previous else None,
    )
    table_state["loaded_at"] = datetime.now()


def reset_state() -> None:
    """Forget the loaded table; the next request loads it again."""
    with _lock:
        table_state.update(rows=[], total_value=0.0, table=None, loaded_at=None)


def _get_table() -> CollapsibleTable:
    if table_state["table"] is None:
        load_table()
    return table_state["table"]


def _row_keys() -> List[str]:
    rows: List[DisplayTargetState] = table_state["rows"]
    return [r.key for r in rows]


def _payload(table: CollapsibleTable) -> Dict[str, Any]:
    return {
        "html": str(renderer.render(table.render(table_state["rows"]))),
        "sort": table.sort_state.to_dict(),
        "expanded": table.expansion.expanded_keys(),
        "total_value": table_state["total_value"],
    }


@app.route('/')
def index():
    """Main page."""
    try:
        with _lock:
            table = _get_table()
            element = table.render(table_state["rows"])
        return renderer.render_page(element, title=config.PAGE_TITLE, interactive=True)
    except (OSError, ValueError) as e:
        logger.exception("Failed to load positions")
        return f"Failed to load positions: {e}", 500


@app.route('/api/health')
def health_check():
    """Health check endpoint."""
    loaded_at = table_state["loaded_at"]
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "loaded_at": loaded_at.isoformat() if loaded_at else None,
    })


@app.route('/api/positions')
def get_positions():
    """Rendered table plus the current sort and expansion state."""
    try:
        with _lock:
            return jsonify(_payload(_get_table()))
    except (OSError, ValueError) as e:
        logger.exception("Failed to load positions")
        return jsonify({"error": str(e)}), 500


@app.route('/api/positions/sort/<int:column>', methods=['POST'])
def toggle_sort(column: int):
    """Header click on the outer table."""
    try:
        with _lock:
            table = _get_table()
            table.toggle_sort(column)
            return jsonify(_payload(table))
    except IndexError as e:
        return jsonify({"error": str(e)}), 404
    except (OSError, ValueError) as e:
        logger.exception("Failed to load positions")
        return jsonify({"error": str(e)}), 500


@app.route('/api/positions/<key>/toggle', methods=['POST'])
def toggle_expanded(key: str):
    """Chevron click on one target row."""
    try:
        with _lock:
            table = _get_table()
            if key not in _row_keys():
                return jsonify({"error": f"Unknown row: {key}"}), 404
            table.toggle_expanded(key)
            return jsonify(_payload(table))
    except (OSError, ValueError) as e:
        logger.exception("Failed to load positions")
        return jsonify({"error": str(e)}), 500


@app.route('/api/positions/<key>/sort/<int:column>', methods=['POST'])
def toggle_nested_sort(key: str, column: int):
    """Header click on the holdings table nested under one target."""
    try:
        with _lock:
            table = _get_table()
            if key not in _row_keys():
                return jsonify({"error": f"Unknown row: {key}"}), 404
            table.nested.toggle_sort(key, column)
            return jsonify(_payload(table))
    except IndexError as e:
        return jsonify({"error": str(e)}), 404
    except (OSError, ValueError) as e:
        logger.exception("Failed to load positions")
        return jsonify({"error": str(e)}), 500


@app.route('/api/positions/reload', methods=['POST'])
def reload_positions():
    """Re-read the data files; sort and expansion state are kept."""
    try:
        with _lock:
            load_table(previous=table_state["table"])
            return jsonify(_payload(table_state["table"]))
    except (OSError, ValueError) as e:
        logger.exception("Failed to reload positions")
        return jsonify({"error": str(e)}), 500


if __name__ == '__main__':
    setup_logging(config.LOG_LEVEL)

    print(f"\n{'='*60}")
    print("ALLOCATION TABLES - Web UI")
    print(f"{'='*60}")
    print(f"\nOpen your browser: http://localhost:{config.PORT}")
    print(f"Positions: {config.POSITIONS_FILE}")
    print(f"Targets:   {config.TARGETS_FILE}")
    print(f"{'='*60}\n")

    app.run(host='0.0.0.0', port=config.PORT, debug=config.FLASK_DEBUG, threaded=True)
