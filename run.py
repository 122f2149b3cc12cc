import os
from tulipa import create_app, db
from tulipa.models import User, Order

# Config name from FLASK_ENV or FLASK_CONFIG
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name in ('development', 'dev'):
    config_name = 'development'

app = create_app(config_name)

@app.shell_context_processor
def make_shell_context():
    """Objects available in 'flask shell'"""
    return dict(db=db, app=app, User=User, Order=Order)

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000)
