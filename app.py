"""
Academic Records Portal
Main Flask application entry point
"""

from flask import Flask
from flask_wtf.csrf import CSRFProtect
from config import Config
from database import db, init_db

def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions with app
    db.init_app(app)
    csrf = CSRFProtect(app)

    # Add CSRF token to template context
    @app.context_processor
    def inject_csrf_token():
        from flask_wtf.csrf import generate_csrf
        return dict(csrf_token=generate_csrf)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.faculty import faculty_bp
    from routes.admin import admin_bp
    from routes.student import student_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(faculty_bp, url_prefix='/faculty')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(student_bp, url_prefix='/student')

    # Initialize database
    init_db(app)

    # Jinja filter: show missing IA scores as N/A, 34.0 -> 34, keep 34.5 as 34.5
    @app.template_filter('format_mark')
    def format_mark(value):
        if value is None or value == "":
            return "N/A"
        try:
            number = float(value)
        except (TypeError, ValueError):
            return value
        if number.is_integer():
            return str(int(number))
        return ("%.2f" % number).rstrip('0').rstrip('.')

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=8000, debug=True, use_reloader=False)
