"""
Email body tests
"""
import asyncio

import pytest

from eventsphere.services.email_service import EmailService


@pytest.fixture
def sent(monkeypatch):
    """Capture outgoing mail instead of logging it"""
    outbox = []

    async def capture(to_email, subject, text_body, html_body):
        outbox.append({'to': to_email, 'subject': subject, 'text': text_body, 'html': html_body})
        return True

    monkeypatch.setattr(EmailService, 'send_email', staticmethod(capture))
    return outbox


def test_certificate_email_escapes_html(sent):
    asyncio.run(EmailService.send_certificate_ready_email(
        participant_email='ravi@college.edu',
        participant_name='<b>Ravi</b>',
        event_title='Rock & Roll <Night>',
        certificate_id='CERT-2026-ABC',
        verification_code='AB12CD34',
    ))

    mail = sent[0]
    assert 'Congratulations, &lt;b&gt;Ravi&lt;/b&gt;!' in mail['html']
    assert '<strong>Rock &amp; Roll &lt;Night&gt;</strong>' in mail['html']
    assert '<b>Ravi</b>' not in mail['html']
    assert 'Your certificate for Rock & Roll <Night> has been issued.' in mail['text']


def test_organizer_email_escapes_name(sent):
    asyncio.run(EmailService.send_organizer_approved_email('prof@college.edu', 'Dr. <script>x</script>'))

    assert 'Welcome aboard, Dr. &lt;script&gt;x&lt;/script&gt;!' in sent[0]['html']
    assert '<script>' not in sent[0]['html']
