"""
Notifications Module - Email and Telegram notifications
"""

import smtplib
import requests
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from flask import current_app
from markupsafe import escape


def get_smtp_config():
    """SMTP settings from the application config"""
    return {
        'host': current_app.config.get('EMAIL_HOST'),
        'port': current_app.config.get('EMAIL_PORT') or 587,
        'user': current_app.config.get('EMAIL_USER'),
        'password': current_app.config.get('EMAIL_PASS'),
        'from': current_app.config.get('EMAIL_FROM') or current_app.config.get('EMAIL_USER'),
    }


def email_configured():
    smtp_cfg = get_smtp_config()
    return bool(smtp_cfg['host'] and smtp_cfg['user'])


def send_email(recipient, subject, body, html_body=None, sender_name='Portfolio'):
    """
    Send an email through the configured SMTP server

    Args:
        recipient (str): Email recipient
        subject (str): Email subject
        body (str): Plain text body
        html_body (str, optional): HTML alternative
        sender_name (str): Display name used in the From header

    Returns:
        bool: Success status
    """
    smtp_cfg = get_smtp_config()
    if not (smtp_cfg['host'] and smtp_cfg['user']):
        current_app.logger.debug("SMTP settings incomplete, email not sent")
        return False

    try:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{sender_name} <{smtp_cfg['from']}>"
        msg['To'] = recipient
        msg.attach(MIMEText(body, 'plain'))
        if html_body:
            msg.attach(MIMEText(html_body, 'html'))

        with smtplib.SMTP(smtp_cfg['host'], int(smtp_cfg['port'])) as server:
            server.starttls()
            if smtp_cfg['password']:
                server.login(smtp_cfg['user'], smtp_cfg['password'])
            server.send_message(msg)

        current_app.logger.info(f"Email sent to {recipient}: {subject}")
        return True
    except Exception as e:
        current_app.logger.error(f"Error sending email to {recipient}: {str(e)}")
        return False


def _message_html(message):
    return str(escape(message)).replace('\n', '<br>')


def send_contact_notification(contact):
    """Forward a contact submission to the site owner"""
    phone = contact.phone or 'Not provided'
    company = contact.company or 'Not provided'
    body = (
        "New contact form submission:\n\n"
        f"Name: {contact.name}\n"
        f"Email: {contact.email}\n"
        f"Phone: {phone}\n"
        f"Company: {company}\n"
        f"Subject: {contact.subject}\n\n"
        f"Message:\n{contact.message}\n"
    )
    html_body = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h2>New Contact Form Submission</h2>'
        f'<p><strong>Name:</strong> {escape(contact.name)}</p>'
        f'<p><strong>Email:</strong> {escape(contact.email)}</p>'
        f'<p><strong>Phone:</strong> {escape(phone)}</p>'
        f'<p><strong>Company:</strong> {escape(company)}</p>'
        f'<p><strong>Subject:</strong> {escape(contact.subject)}</p>'
        f'<p><strong>Message:</strong></p><div>{_message_html(contact.message)}</div>'
        '<p style="color: #666; font-size: 12px;">'
        'This email was automatically generated from your portfolio contact form.</p>'
        '</div>'
    )
    return send_email(
        recipient=get_smtp_config()['from'],
        subject=f"New Contact: {contact.subject}",
        body=body,
        html_body=html_body,
    )


def send_contact_auto_reply(contact):
    """Acknowledge a contact submission to the sender"""
    body = (
        f"Hi {contact.name},\n\n"
        "Thank you for reaching out through my portfolio website. "
        f"I have received your message about \"{contact.subject}\" "
        "and will get back to you as soon as possible.\n\n"
        "I typically respond within 24-48 hours.\n\n"
        "Best regards\n"
    )
    html_body = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h2>Thank you for contacting me!</h2>'
        f'<p>Hi {escape(contact.name)},</p>'
        '<p>Thank you for reaching out through my portfolio website. '
        'I have received your message and will get back to you as soon as possible.</p>'
        f'<h3>Your Message Summary:</h3><p><strong>Subject:</strong> {escape(contact.subject)}</p>'
        f'<div>{_message_html(contact.message)}</div>'
        '<p>I typically respond within 24-48 hours.</p>'
        '<p style="color: #666; font-size: 12px;">'
        'This is an automated response. Please do not reply to this email.</p>'
        '</div>'
    )
    return send_email(
        recipient=contact.email,
        subject=f"Re: {contact.subject} - Thank you for contacting me",
        body=body,
        html_body=html_body,
    )


def send_admin_telegram(subject, message_text):
    """Ping the site owner on Telegram when a bot token and chat id are configured"""
    bot_token = current_app.config.get('ADMIN_TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('ADMIN_TELEGRAM_CHAT_ID')
    if not (bot_token and chat_id):
        current_app.logger.debug("Admin Telegram credentials not configured")
        return False

    try:
        url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        payload = {
            'chat_id': chat_id,
            'text': f"<b>{escape(subject)}</b>\n\n{escape(message_text)}",
            'parse_mode': 'HTML'
        }
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            current_app.logger.info("Admin Telegram notification sent")
            return True
        current_app.logger.error(f"Telegram API error: {response.status_code}")
        return False
    except Exception as e:
        current_app.logger.error(f"Admin Telegram Error: {str(e)}")
        return False


def notify_new_contact(contact):
    """
    Run every notification for a fresh contact submission.
    Failures are logged and never raised so the submission still succeeds.
    """
    results = {'notification': False, 'auto_reply': False, 'telegram': False}

    if email_configured():
        results['notification'] = send_contact_notification(contact)
        results['auto_reply'] = send_contact_auto_reply(contact)
    else:
        current_app.logger.debug("Email not configured, skipping contact emails")

    results['telegram'] = send_admin_telegram(
        f"New Contact: {contact.subject}",
        f"From: {contact.name} <{contact.email}>\n\n{contact.message}"
    )
    return results


__all__ = [
    'get_smtp_config',
    'email_configured',
    'send_email',
    'send_contact_notification',
    'send_contact_auto_reply',
    'send_admin_telegram',
    'notify_new_contact',
]
