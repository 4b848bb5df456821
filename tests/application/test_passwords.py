from storefront.services.passwords import hash_password, verify_password


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("secret123", rounds=4)

        assert hashed.startswith("$2b$04$")
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_default_rounds_come_from_settings(self):
        #the test env sets BCRYPT_ROUNDS=4
        assert hash_password("secret123").startswith("$2b$04$")

    def test_long_passwords_hash_and_verify(self):
        password = "p" * 100
        hashed = hash_password(password, rounds=4)

        assert verify_password(password, hashed)

    def test_garbage_hash_never_verifies(self):
        assert not verify_password("x", "not-a-hash")
        assert not verify_password("x", "md5$1$abc$def")
