"""Development entrypoint: `python app.py` (or `flask --app app run`)."""

from src.staff_analytics.staff_analytics.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
