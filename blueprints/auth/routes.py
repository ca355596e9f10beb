"""
Auth Routes - Admin login and logout
"""

from flask import render_template, session, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user
from utils.data import get_user_by_email
from utils.decorators import is_admin_user
from utils.security import get_client_ip
from . import auth_bp


def start_user_session(user):
    """Log the user in and store the session identity"""
    login_user(user)
    session.permanent = True
    session['user'] = user.session_payload()


def end_user_session():
    logout_user()
    session.clear()


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login"""
    if is_admin_user():
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        user = get_user_by_email(email)
        if not user or not user.check_password(password):
            current_app.logger.warning(f"Failed admin login for {email} from {get_client_ip()}")
            flash('Invalid email or password', 'error')
            return redirect(url_for('auth.login'))

        if user.role != 'admin':
            flash('Access denied. Admin privileges required.', 'error')
            return redirect(url_for('auth.login'))

        if not user.is_active:
            flash('This account has been deactivated.', 'error')
            return redirect(url_for('auth.login'))

        start_user_session(user)
        current_app.logger.info(f"Admin login: {user.email}")
        flash(f'Welcome back, {user.name}!', 'success')
        return redirect(url_for('admin.dashboard'))

    return render_template('admin/login.html', title='Admin Login')


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Logout current user"""
    end_user_session()
    flash('Logged out successfully', 'success')
    return redirect(url_for('auth.login'))
