from memory.history import Block, Step


def make_step(sizes, highlight="", free=(), index=0, algo="first_fit", op="malloc"):
    blocks = tuple(
        Block(f"0x{i:04x}", size, i in free) for i, size in enumerate(sizes)
    )
    return Step(index, algo, op, highlight, blocks)
