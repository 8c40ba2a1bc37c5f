"""Main entry point for the storefront."""

import os

from groupbuy import create_app

app = create_app()


@app.route("/health")
def health_check():
    """Report liveness without touching the visitor's storefront session."""
    return "OK", 200


if __name__ == "__main__":
    app.run(
        debug=os.environ.get("FLASK_DEBUG") == "1",
        host=os.environ.get("HOST", "0.0.0.0"),  # nosec
        port=int(os.environ.get("PORT", "27272")),
    )
