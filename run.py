from fibserver import create_app

app = create_app()

if __name__ == "__main__":
    # threaded=True -> több szál, ezért kell a lockolás
    app.run(app.config["HOST"], app.config["PORT"], debug=False, threaded=True)
