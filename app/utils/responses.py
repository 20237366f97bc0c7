from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None):
    return jsonify({
        "status": "error",
        "message": message,
        "code": code or status
    }), status


def validation_error_response(errors, message="Validation failed"):
    return jsonify({
        "status": "error",
        "message": message,
        "code": 422,
        "errors": errors,
    }), 422


def redirect_with_message(location: str, message: str, status=303):
    """JSON body plus Location header, for flows that send the shopper elsewhere."""
    resp = jsonify({"status": "redirect", "message": message, "location": location})
    resp.status_code = status
    resp.headers["Location"] = location
    return resp


def internal_error_response():
    return error("An unexpected error occurred. Please try again later.", status=500)
