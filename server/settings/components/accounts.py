"""Accounts settings."""

from server.settings.components import config

# Shown for every new account until the user sets their own avatar
ACCOUNTS_AVATAR_PLACEHOLDER_URL = config(
    'ACCOUNTS_AVATAR_PLACEHOLDER_URL',
    default='https://img.freepik.com/free-psd/3d-illustration-person-with-sunglasses_23-2149436188.jpg',
)
