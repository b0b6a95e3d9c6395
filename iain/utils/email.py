import asyncio
import logging
import smtplib
from concurrent.futures import ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from iain import config

LOG = logging.getLogger(__name__)

# Thread pool for async email sending
executor = ThreadPoolExecutor(max_workers=3)

# Relay per MAIL_PROVIDER value; "auto" picks one from MAIL_USERNAME
SMTP_CONFIGS = {
    'gmail': {'host': 'smtp.gmail.com', 'port': 587, 'use_tls': True},
    'outlook': {'host': 'smtp-mail.outlook.com', 'port': 587, 'use_tls': True},
    'custom': {'host': config.SMTP_HOST, 'port': config.SMTP_PORT, 'use_tls': True},
}

OUTLOOK_DOMAINS = ('outlook.com', 'hotmail.com', 'live.com')


def detect_email_provider(email_address):
    domain = email_address.rpartition('@')[2].lower()
    if domain == 'gmail.com':
        return 'gmail'
    if domain in OUTLOOK_DOMAINS:
        return 'outlook'
    return 'custom'


def get_smtp_config():
    provider = config.MAIL_PROVIDER
    if provider == 'auto':
        provider = detect_email_provider(config.MAIL_USERNAME)
        LOG.debug("Auto-detected mail provider: %s", provider)

    return SMTP_CONFIGS.get(provider, SMTP_CONFIGS['custom'])


def send_email_sync(to_email, subject, html_content, text_content=None):
    """Send email via SMTP. Returns True when the relay accepted the message."""
    sender_email = config.MAIL_USERNAME
    sender_password = config.MAIL_PASSWORD

    if not sender_email or not sender_password:
        LOG.error("Email credentials not configured; '%s' to %s not sent", subject, to_email)
        return False

    smtp_config = get_smtp_config()

    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = f"{config.MAIL_FROM_NAME} <{sender_email}>"
    message["To"] = to_email

    if text_content:
        message.attach(MIMEText(text_content, "plain"))
    message.attach(MIMEText(html_content, "html"))

    try:
        server = smtplib.SMTP(smtp_config['host'], smtp_config['port'])
        server.ehlo()
        if smtp_config['use_tls']:
            server.starttls()
            server.ehlo()

        server.login(sender_email, sender_password)
        server.send_message(message)
        server.quit()

        LOG.info("Email '%s' sent to %s", subject, to_email)
        return True

    except (smtplib.SMTPException, OSError):
        LOG.exception("Email '%s' to %s failed", subject, to_email)
        return False


async def _send(to_email, subject, html_content, text_content=None):
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        executor, send_email_sync, to_email, subject, html_content, text_content
    )


async def send_welcome_email(email):
    """Tell a newly created applicant where to log in."""
    subject = "Welcome to IAIN - Account Created!"

    text_content = f"""
Welcome!

Your login email is: {email}

You can now log in to the web application here: {config.WEB_APP_URL}

Thank you for joining us!
    """

    html_content = f"""
<h1>Welcome!</h1>
<p>Your login email is: <strong>{email}</strong></p>
<p>You can now log in to the web application here:</p>
<p><a href="{config.WEB_APP_URL}">Click here to log in</a></p>
<br>
<p>Thank you for joining us!</p>
    """

    return await _send(email, subject, html_content, text_content)


async def send_otp_email(email, otp, name="User"):
    """Mail a password reset code. Returns False when it was not delivered."""
    subject = "IAIN - Your password reset code"

    text_content = f"""
Hi {name},

Use this code to reset your IAIN dashboard password: {otp}

The code expires in 10 minutes. If you did not ask for a reset, you can ignore this message.
    """

    html_content = f"""
<p>Hi {name},</p>
<p>Use this code to reset your IAIN dashboard password:</p>
<h2 style="letter-spacing:6px;font-family:monospace;">{otp}</h2>
<p>The code expires in <strong>10 minutes</strong>.</p>
<p>If you did not ask for a reset, you can ignore this message.</p>
    """

    return await _send(email, subject, html_content, text_content)
