#!/usr/bin/env python3
"""Send a real email through SendGrid using SENDGRID_* settings from .env.local / .env."""

from sendgrid_rest import config
from sendgrid_rest.providers import EmailAdapterError, SendEmailOptions, create_email_adapter_from_env

print("🧪 Testing SendGrid Email Send")
print("=" * 60)

if not config.SENDGRID_API_KEY:
    print("❌ SENDGRID_API_KEY is not set. Add it to .env.local and try again.")
    raise SystemExit(1)

adapter = create_email_adapter_from_env()
print(f"Using Provider: {adapter.get_provider_name()}")
print(f"Default From: {adapter.default_from_name} <{adapter.default_from_address}>")
print()

# Test email
test_email = input("Enter your email address to test: ").strip()

if test_email:
    print(f"\nSending test email to {test_email}...")

    try:
        adapter.send_email(SendEmailOptions(
            to=test_email,
            subject='Test Email from sendgrid-rest',
            text='Hello! This is a test email sent via the SendGrid REST adapter.',
            html='<p>Hello! This is a test email sent via the <b>SendGrid REST</b> adapter.</p>'
        ))
    except EmailAdapterError as e:
        print(f"❌ Email failed ({e.status_code}): {e.message}")
    else:
        print("✅ Email accepted by SendGrid!")
else:
    print("No email address provided. Skipping test.")
