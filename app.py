from dotenv import load_dotenv
from flask import Blueprint, Flask, current_app, g, jsonify, request
from loguru import logger

from taskboard import boards, columns, tasks, users
from taskboard.auth import create_token, resolve_caller
from taskboard.config import Settings, configure_logging
from taskboard.errors import TaskBoardError, Unauthenticated, ValidationError
from taskboard.storage import open_store
from taskboard.views import board_view

load_dotenv()

api = Blueprint("api", __name__)

# Ids and orders are stored in INTEGER columns.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def get_store():
    return current_app.config["STORE"]


def issue_token(user_id):
    settings = current_app.config["SETTINGS"]
    return create_token(user_id, settings.secret_key, settings.token_expiry_days)


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def required_text(data, field, label):
    value = data.get(field)
    value = value.strip() if isinstance(value, str) else ""
    if not value:
        raise ValidationError(f"{label} is required")
    return value


def optional_text(data, field):
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def required_int(data, field):
    value = data.get(field)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if not INT_MIN <= value <= INT_MAX:
        raise ValidationError(f"{field} is out of range")
    return value


@api.before_app_request
def resolve_identity():
    g.user_id = resolve_caller(
        request.headers.get("Authorization"), current_app.config["SECRET_KEY"]
    )


@api.route("/health")
def health():
    return jsonify({"message": "OK"})


# ---- Auth ----


@api.route("/api/auth/register", methods=["POST"])
def register():
    data = json_body()
    user = users.register(get_store(), data.get("email"), data.get("password"))
    return jsonify({"token": issue_token(user.id), "email": user.email}), 201


@api.route("/api/auth/login", methods=["POST"])
def login():
    data = json_body()
    user = users.login(get_store(), data.get("email"), data.get("password"))
    return jsonify({"token": issue_token(user.id), "email": user.email})


@api.route("/api/auth/guest", methods=["POST"])
def guest():
    user = users.create_guest(get_store())
    return jsonify({"token": issue_token(user.id)}), 201


@api.route("/api/auth/me", methods=["GET"])
def get_me():
    user = users.get_user(get_store(), g.user_id)
    if user is None:
        raise Unauthenticated()
    return jsonify(user.to_dict())


# ---- Boards ----


@api.route("/api/boards", methods=["GET"])
def list_boards():
    return jsonify([b.to_dict() for b in boards.list_boards(get_store(), g.user_id)])


@api.route("/api/boards", methods=["POST"])
def create_board():
    name = required_text(json_body(), "name", "Name")
    board_id = boards.create_board(get_store(), g.user_id, name)
    return jsonify({"id": board_id}), 201


@api.route("/api/boards/<int:board_id>", methods=["GET"])
def get_board(board_id):
    board = boards.get_board(get_store(), g.user_id, board_id)
    return jsonify(board.to_dict() if board else None)


@api.route("/api/boards/<int:board_id>", methods=["DELETE"])
def delete_board(board_id):
    boards.remove_board(get_store(), g.user_id, board_id)
    return jsonify({"success": True})


@api.route("/api/boards/<int:board_id>/view", methods=["GET"])
def view_board(board_id):
    return jsonify(board_view(get_store(), g.user_id, board_id))


# ---- Columns ----


@api.route("/api/boards/<int:board_id>/columns", methods=["GET"])
def list_columns(board_id):
    return jsonify([c.to_dict() for c in columns.list_columns(get_store(), g.user_id, board_id)])


@api.route("/api/boards/<int:board_id>/columns", methods=["POST"])
def create_column(board_id):
    name = required_text(json_body(), "name", "Name")
    column_id = columns.create_column(get_store(), g.user_id, board_id, name)
    return jsonify({"id": column_id}), 201


@api.route("/api/columns/<int:column_id>", methods=["DELETE"])
def delete_column(column_id):
    columns.remove_column(get_store(), g.user_id, column_id)
    return jsonify({"success": True})


# ---- Tasks ----


@api.route("/api/boards/<int:board_id>/tasks", methods=["GET"])
def list_tasks(board_id):
    return jsonify([t.to_dict() for t in tasks.list_tasks(get_store(), g.user_id, board_id)])


@api.route("/api/boards/<int:board_id>/tasks", methods=["POST"])
def create_task(board_id):
    data = json_body()
    title = required_text(data, "title", "Title")
    column_id = required_int(data, "column_id")
    description = optional_text(data, "description") or None
    task_id = tasks.create_task(get_store(), g.user_id, board_id, column_id, title, description)
    return jsonify({"id": task_id}), 201


@api.route("/api/tasks/<int:task_id>", methods=["PATCH"])
def update_task(task_id):
    data = json_body()
    title = optional_text(data, "title")
    description = optional_text(data, "description")
    if title is None and description is None:
        raise ValidationError("Nothing to update")
    if title is not None and not title:
        raise ValidationError("Title is required")
    tasks.update_task(get_store(), g.user_id, task_id, title=title, description=description)
    return jsonify({"success": True})


@api.route("/api/tasks/<int:task_id>/move", methods=["POST"])
def move_task(task_id):
    data = json_body()
    column_id = required_int(data, "column_id")
    order = required_int(data, "order")
    tasks.move_task(get_store(), g.user_id, task_id, column_id, order)
    return jsonify({"success": True})


@api.route("/api/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id):
    tasks.remove_task(get_store(), g.user_id, task_id)
    return jsonify({"success": True})


def handle_taskboard_error(error):
    return jsonify({"error": error.message}), error.status_code


def create_app(settings=None, store=None):
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["SETTINGS"] = settings
    app.config["STORE"] = store if store is not None else open_store(settings)
    app.register_blueprint(api)
    app.register_error_handler(TaskBoardError, handle_taskboard_error)
    logger.info("TaskBoard API ready ({})", type(app.config["STORE"]).__name__)
    return app


app = create_app()
