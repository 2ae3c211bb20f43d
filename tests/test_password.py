"""
Password hashing and strength rules
"""
import string

from eventsphere.auth import (
    hash_password,
    verify_password,
    validate_password_strength,
    generate_random_password,
    generate_verification_code,
)


def test_hash_and_verify():
    hashed = hash_password('Secret123')
    assert hashed != 'Secret123'
    assert verify_password('Secret123', hashed)
    assert not verify_password('secret123', hashed)


def test_strong_password_has_no_errors():
    assert validate_password_strength('Campus2026') == []


def test_weak_password_lists_every_rule():
    errors = validate_password_strength('abc')
    assert 'Password must be at least 8 characters long' in errors
    assert 'Password must contain at least one uppercase letter' in errors
    assert 'Password must contain at least one number' in errors
    assert 'Password must contain at least one lowercase letter' not in errors


def test_generated_password_passes_rules():
    for _ in range(20):
        password = generate_random_password(12)
        assert len(password) == 12
        assert validate_password_strength(password) == []


def test_verification_code_alphabet():
    code = generate_verification_code()
    assert len(code) == 8
    assert set(code) <= set(string.ascii_uppercase + string.digits)
