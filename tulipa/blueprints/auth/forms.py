from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField
from wtforms.validators import DataRequired, Email

class LoginForm(FlaskForm):
    """Operator sign-in"""
    email = StringField('Email', validators=[
        DataRequired(message="Enter your email"),
        Email(message="Not a valid email address")
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Enter your password")
    ])
    remember_me = BooleanField('Keep me signed in')
    submit = SubmitField('Sign in')
