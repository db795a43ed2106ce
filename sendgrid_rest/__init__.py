"""
SendGrid REST email adapter.

Maps a generic send request onto SendGrid's v3 Mail Send API and turns its
responses back into a None-or-raise contract.
"""
