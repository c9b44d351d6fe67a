import os

from yahtzee import create_app, db, socketio

app = create_app()

with app.app_context():
    db.create_all()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, port=int(os.environ.get('PORT', '3001')), debug=app.config.get('DEV_MODE', False))
