"""CHIP-8 instruction decoding."""

from enum import IntEnum

import jax.numpy as jnp
from chex import dataclass


class Op(IntEnum):
    """Every distinct CHIP-8 behavior. The value indexes the dispatch table."""
    UNDEFINED = 0
    CLS = 1           # 00E0
    RET = 2           # 00EE
    JP = 3            # 1NNN
    CALL = 4          # 2NNN
    SE_IMM = 5        # 3XNN
    SNE_IMM = 6       # 4XNN
    SE_REG = 7        # 5XY0
    LD_IMM = 8        # 6XNN
    ADD_IMM = 9       # 7XNN
    LD_REG = 10       # 8XY0
    OR = 11           # 8XY1
    AND = 12          # 8XY2
    XOR = 13          # 8XY3
    ADD_REG = 14      # 8XY4
    SUB = 15          # 8XY5
    SHR = 16          # 8XY6
    SUBN = 17         # 8XY7
    SHL = 18          # 8XYE
    SNE_REG = 19      # 9XY0
    LD_I = 20         # ANNN
    JP_V0 = 21        # BNNN
    RND = 22          # CXNN
    DRW = 23          # DXYN
    SKP = 24          # EX9E
    SKNP = 25         # EXA1
    LD_VX_DT = 26     # FX07
    LD_VX_K = 27      # FX0A
    LD_DT_VX = 28     # FX15
    LD_ST_VX = 29     # FX18
    ADD_I_VX = 30     # FX1E
    LD_F_VX = 31      # FX29
    LD_B_VX = 32      # FX33
    LD_MEM_VX = 33    # FX55
    LD_VX_MEM = 34    # FX65


# Families dispatched on the first nibble alone.
_SINGLE_OP_FAMILIES = {
    0x1: Op.JP, 0x2: Op.CALL, 0x3: Op.SE_IMM, 0x4: Op.SNE_IMM, 0x5: Op.SE_REG,
    0x6: Op.LD_IMM, 0x7: Op.ADD_IMM, 0x9: Op.SNE_REG, 0xA: Op.LD_I,
    0xB: Op.JP_V0, 0xC: Op.RND, 0xD: Op.DRW,
}

# 8XYN, keyed by N.
_ALU_OPS = {
    0x0: Op.LD_REG, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR, 0x4: Op.ADD_REG,
    0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN, 0xE: Op.SHL,
}

# EXNN and FXNN, keyed by NN.
_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}
_MISC_OPS = {
    0x07: Op.LD_VX_DT, 0x0A: Op.LD_VX_K, 0x15: Op.LD_DT_VX, 0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX, 0x29: Op.LD_F_VX, 0x33: Op.LD_B_VX, 0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: int      # Op value
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def classify(instruction: int) -> jnp.ndarray:
    """Map a 16-bit word to its ``Op``; unknown words map to ``Op.UNDEFINED``.

    Works on Python ints and traced values alike.
    """
    word = jnp.asarray(instruction).astype(jnp.int32)
    opcode = (word & 0xF000) >> 12
    n = word & 0x000F
    nn = word & 0x00FF

    conditions = [word == 0x00E0, word == 0x00EE]
    choices = [Op.CLS, Op.RET]
    for family, op in _SINGLE_OP_FAMILIES.items():
        conditions.append(opcode == family)
        choices.append(op)
    for low_nibble, op in _ALU_OPS.items():
        conditions.append((opcode == 0x8) & (n == low_nibble))
        choices.append(op)
    for low_byte, op in _KEY_OPS.items():
        conditions.append((opcode == 0xE) & (nn == low_byte))
        choices.append(op)
    for low_byte, op in _MISC_OPS.items():
        conditions.append((opcode == 0xF) & (nn == low_byte))
        choices.append(op)

    return jnp.select(conditions, [int(op) for op in choices], default=int(Op.UNDEFINED))


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        op=classify(instruction),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
