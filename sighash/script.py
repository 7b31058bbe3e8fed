"""
Copyright (c) 2009 Satoshi Nakamoto
Distributed under the MIT/X11 software license

Script opcodes and the Script byte container
"""

import struct
from typing import Iterable, Optional, Tuple, Union

# Script opcodes
OP_0 = 0
OP_FALSE = OP_0
OP_PUSHDATA1 = 76
OP_PUSHDATA2 = 77
OP_PUSHDATA4 = 78
OP_1NEGATE = 79
OP_RESERVED = 80
OP_1 = 81
OP_TRUE = OP_1
OP_2 = 82
OP_3 = 83
OP_4 = 84
OP_5 = 85
OP_6 = 86
OP_7 = 87
OP_8 = 88
OP_9 = 89
OP_10 = 90
OP_11 = 91
OP_12 = 92
OP_13 = 93
OP_14 = 94
OP_15 = 95
OP_16 = 96
OP_NOP = 97
OP_VER = 98
OP_IF = 99
OP_NOTIF = 100
OP_VERIF = 101
OP_VERNOTIF = 102
OP_ELSE = 103
OP_ENDIF = 104
OP_VERIFY = 105
OP_RETURN = 106
OP_DUP = 118
OP_EQUAL = 135
OP_EQUALVERIFY = 136
OP_HASH160 = 169
OP_CODESEPARATOR = 171
OP_CHECKSIG = 172
OP_CHECKSIGVERIFY = 173
OP_CHECKMULTISIG = 174
OP_CHECKMULTISIGVERIFY = 175
OP_INVALIDOPCODE = 0xFF


class Script:
    """Transaction script, an ordered sequence of opcode and data bytes"""

    def __init__(self, data: Union[bytes, bytearray, Iterable[int], None] = None):
        self.data = bytearray(data) if data else bytearray()

    def __add__(self, other):
        """Concatenate scripts"""
        result = self.copy()
        result += other
        return result

    def __iadd__(self, other):
        """In-place concatenation of a script or raw bytes"""
        if isinstance(other, Script):
            self.data.extend(other.data)
        elif isinstance(other, (bytes, bytearray)):
            self.data.extend(other)
        else:
            return NotImplemented
        return self

    def __eq__(self, other):
        return isinstance(other, Script) and self.data == other.data

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(bytes(self.data))

    def copy(self) -> "Script":
        return Script(self.data)

    def push_opcode(self, opcode: int):
        """Push opcode to script"""
        if not 0 <= opcode <= 0xFF:
            raise ValueError("opcode out of range: %d" % opcode)
        self.data.append(opcode)

    def push_data(self, data: bytes):
        """Push data to script"""
        if len(data) < OP_PUSHDATA1:
            self.data.append(len(data))
        elif len(data) <= 0xFF:
            self.data.append(OP_PUSHDATA1)
            self.data.append(len(data))
        elif len(data) <= 0xFFFF:
            self.data.append(OP_PUSHDATA2)
            self.data.extend(struct.pack("<H", len(data)))
        else:
            self.data.append(OP_PUSHDATA4)
            self.data.extend(struct.pack("<I", len(data)))
        self.data.extend(data)

    def serialize(self, stream, n_type: int = 0, n_version: int = 101):
        """Serialize to stream"""
        stream.write_compact_size(len(self.data))
        stream.write(bytes(self.data))

    def unserialize(self, stream, n_type: int = 0, n_version: int = 101):
        """Unserialize from stream"""
        size = stream.read_compact_size()
        self.data = bytearray(stream.read(size))

    def get_serialize_size(self, n_type: int = 0, n_version: int = 101) -> int:
        """Get serialized size"""
        from sighash.serialize import get_size_of_compact_size

        return get_size_of_compact_size(len(self.data)) + len(self.data)

    def __str__(self):
        return self.data.hex()

    def __repr__(self):
        return f"Script('{self.data.hex()}')"

    def __len__(self):
        return len(self.data)

    def get_op(self, pc: int) -> Tuple[bool, int, int, Optional[bytes]]:
        """
        Get next opcode from script

        Args:
            pc: Current position in script

        Returns:
            (success, new_pc, opcode, data) tuple
            - success: True if a whole opcode was read
            - new_pc: New position after reading
            - opcode: Opcode value
            - data: Push data (if opcode is push data), None otherwise

        A push whose length runs past the end of the script is a failed
        read; callers stop there and treat the remainder as opaque bytes.
        """
        end = len(self.data)
        if pc >= end:
            return False, pc, OP_INVALIDOPCODE, None

        opcode = self.data[pc]
        pc += 1

        data = None
        if opcode <= OP_PUSHDATA4:
            n_size = opcode
            if opcode == OP_PUSHDATA1:
                if end - pc < 1:
                    return False, pc, opcode, None
                n_size = self.data[pc]
                pc += 1
            elif opcode == OP_PUSHDATA2:
                if end - pc < 2:
                    return False, pc, opcode, None
                n_size = struct.unpack("<H", bytes(self.data[pc : pc + 2]))[0]
                pc += 2
            elif opcode == OP_PUSHDATA4:
                if end - pc < 4:
                    return False, pc, opcode, None
                n_size = struct.unpack("<I", bytes(self.data[pc : pc + 4]))[0]
                pc += 4

            if end - pc < n_size:
                return False, pc, opcode, None

            data = bytes(self.data[pc : pc + n_size])
            pc += n_size

        return True, pc, opcode, data

    def iter_ops(self):
        """Yield (start, end, opcode) for each whole opcode in the script"""
        pc = 0
        while True:
            start = pc
            success, pc, opcode, _ = self.get_op(pc)
            if not success:
                return
            yield start, pc, opcode

    def count_op(self, opcode: int) -> int:
        """Count occurrences of opcode, skipping over push data"""
        return sum(1 for _, _, op in self.iter_ops() if op == opcode)

    def find_and_delete(self, script_to_find: "Script") -> int:
        """
        Delete every occurrence of script_to_find that starts on an
        opcode boundary. Returns the number of occurrences removed.
        """
        needle = bytes(script_to_find.data)
        if not needle:
            return 0

        n_found = 0
        pc = 0
        while True:
            while len(self.data) - pc >= len(needle) and self.data[pc : pc + len(needle)] == needle:
                del self.data[pc : pc + len(needle)]
                n_found += 1
            success, pc, _, _ = self.get_op(pc)
            if not success:
                return n_found
