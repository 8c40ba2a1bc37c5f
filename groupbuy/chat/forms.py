"""Forms for the chat blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Length

MAX_UTTERANCE_LENGTH = 2000


class ChatForm(FlaskForm):
    """Form for sending one message to the advisor."""

    message = StringField(
        "Message",
        validators=[DataRequired(), Length(max=MAX_UTTERANCE_LENGTH)],
        render_kw={"placeholder": "输入您的问题..."},
    )
