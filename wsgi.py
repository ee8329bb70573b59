from blog import create_app

PORT = 8000

app = create_app()


if __name__ == "__main__":
    app.logger.info("Server started on port %s", PORT)
    app.run(port=PORT)
