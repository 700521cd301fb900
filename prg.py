"""
Pseudo-random generator based on AES-CTR.

A block of output is the AES-CTR encryption of NONCE || counter under the
key and IV taken from the seed; the counter grows by one for every block.
The stream is fully determined by the seed, which makes protocol runs
reproducible.

A fresh cipher is built on every call to next(), so only the block counter
carries over between calls. Within one call the CTR keystream advances as a
128-bit big-endian counter on the IV (the cryptography CTR mode), so
multi-block requests are not byte-compatible with a 64-bit little-endian
CTR variant.
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes


class Prg:
    """Deterministic byte stream generator."""

    NONCE = 0x0123456789ABCDEF
    INITIAL_COUNTER = 0

    # All lengths are in bytes
    KEY_LEN = 16
    IV_LEN = 16
    BLOCK_LEN = 16

    def __init__(self, seed=None):
        """
        Args:
            seed: bytes-like seed. None gives an all-zero seed. Seeds longer
                than KEY_LEN + IV_LEN are cropped, shorter ones are padded
                with zeros. The first half is the AES key, the second half
                the CTR initialisation vector.
        """
        seed_len = self.KEY_LEN + self.IV_LEN
        if seed is None:
            seed = bytes(seed_len)
        elif isinstance(seed, (str, int)):
            # bytes(n) would silently build n zero bytes
            raise TypeError(f"Seed must be bytes-like, not {type(seed).__name__}")
        else:
            seed = bytes(seed)[:seed_len].ljust(seed_len, b'\x00')

        self.seed = seed
        self._counter = self.INITIAL_COUNTER

    @property
    def key(self):
        return self.seed[:self.KEY_LEN]

    @property
    def iv(self):
        return self.seed[self.KEY_LEN:]

    @property
    def counter(self):
        """Number of blocks produced since the last reset."""
        return self._counter

    def reset(self):
        """Rewind the stream to its first block."""
        self._counter = self.INITIAL_COUNTER

    def next(self, n_bytes):
        """Return the next n_bytes of the stream."""
        if n_bytes < 0:
            raise ValueError("Cannot generate a negative number of bytes")
        if n_bytes == 0:
            return b''

        n_blocks = -(-n_bytes // self.BLOCK_LEN)

        encryptor = Cipher(algorithms.AES(self.key), modes.CTR(self.iv)).encryptor()
        nonce = self.NONCE.to_bytes(8, 'little')

        out = bytearray()
        for _ in range(n_blocks):
            block = nonce + self._counter.to_bytes(8, 'little')
            out += encryptor.update(block)
            self._counter += 1
        out += encryptor.finalize()

        return bytes(out[:n_bytes])

    def __repr__(self):
        return f"Prg(counter={self._counter})"
