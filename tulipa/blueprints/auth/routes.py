from flask import render_template, redirect, request, url_for, flash, current_app
from flask_login import login_user, logout_user
from urllib.parse import urlsplit

from tulipa.models.auth import User
from tulipa.blueprints.auth import auth_bp
from tulipa.blueprints.auth.forms import LoginForm
from tulipa.utils.decorators import session_required
from tulipa.utils.session import SessionState, resolve_session

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    # Already signed in: straight to the orders
    if resolve_session() is SessionState.AUTHENTICATED:
        return redirect(url_for('orders.index'))

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.strip().lower()).first()

        if user is None or not user.verify_password(form.password.data):
            current_app.logger.warning(f'Failed sign-in for {form.email.data}')
            flash('Invalid email or password.', 'danger')
            return redirect(url_for('auth.login'))

        if not user.is_active:
            flash('This account is disabled.', 'danger')
            return redirect(url_for('auth.login'))

        login_user(user, remember=form.remember_me.data)
        user.touch_login()

        # Only follow local "next" targets
        next_page = request.args.get('next')
        if not next_page or urlsplit(next_page).netloc != '':
            next_page = url_for('orders.index')
        return redirect(next_page)

    return render_template('auth/login.html', form=form)

@auth_bp.route('/logout')
@session_required
def logout():
    logout_user()
    flash('You have been signed out.', 'info')
    return redirect(url_for('auth.login'))
