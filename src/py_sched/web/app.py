"""Flask application factory for the simulator's JSON API.

Request bodies describe processes as a list of objects::

    {"id": "P1", "arrival_time": 0, "burst_time": 5, "priority": 1}

Invalid input of any kind comes back as ``400`` with an ``error`` field
naming what to fix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import Flask, Response, jsonify, request

from py_sched.compare import compare
from py_sched.config import DEFAULT_QUANTUM, SimulationConfig
from py_sched.dispatch import PolicyName, simulate
from py_sched.process import Process
from py_sched.validation import ConfigurationError, validate_quantum

if TYPE_CHECKING:
    from collections.abc import Mapping

_HTTP_BAD_REQUEST = 400


def _json_body() -> Mapping[str, Any]:
    """Return the request's JSON object.

    Raises:
        ConfigurationError: If the body is missing or not an object.

    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        msg = "Request body must be a JSON object"
        raise ConfigurationError(msg)
    return data


def _processes(data: Mapping[str, Any]) -> list[Process]:
    """Parse the ``processes`` list of a request body.

    Raises:
        ConfigurationError: If the list is missing or malformed.

    """
    entries = data.get("processes")
    if not isinstance(entries, list):
        msg = "Missing 'processes' list"
        raise ConfigurationError(msg)
    processes: list[Process] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = f"Process entry must be an object, got {entry!r}"
            raise ConfigurationError(msg)
        processes.append(Process.from_mapping(entry))
    return processes


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.errorhandler(ConfigurationError)
    def bad_input(error: ConfigurationError) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Report invalid input as a 400 JSON error."""
        return jsonify({"error": str(error)}), _HTTP_BAD_REQUEST

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the available policies.

        Returns:
            JSON with ``policies`` and ``default_quantum`` fields.

        """
        return jsonify(
            {
                "policies": [
                    {"id": p.value, "name": p.display_name, "preemptive": p.preemptive, "uses_quantum": p.uses_quantum}
                    for p in PolicyName
                ],
                "default_quantum": DEFAULT_QUANTUM,
            },
        )

    @app.route("/api/simulate", methods=["POST"])
    def run_simulation() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Run one policy.

        Expects JSON body: ``{"policy": "...", "quantum"?: n, "processes": [...]}``

        Returns:
            The serialised ``SimulationResult``.

        """
        data = _json_body()
        config = SimulationConfig.from_mapping(data)
        result = simulate(_processes(data), config.policy, quantum=config.quantum)
        return jsonify(result.to_dict())

    @app.route("/api/compare", methods=["POST"])
    def run_comparison() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Run every policy over the same processes.

        Expects JSON body: ``{"quantum"?: n, "processes": [...]}``

        Returns:
            JSON mapping each policy id to its five metrics.

        """
        data = _json_body()
        quantum = data.get("quantum")
        if quantum is not None:
            validate_quantum(quantum)
        comparison = compare(_processes(data), quantum=quantum)
        return jsonify(comparison.to_dict())

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-sched-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
