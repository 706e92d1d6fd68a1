from alias_game import create_app, socketio
from alias_game.services.bootstrap import seed_on_startup

app = create_app()
# Reset and seed the default rooms before serving; a failure aborts startup
seed_on_startup(app)

if __name__ == '__main__':
    socketio.run(app, debug=True)
