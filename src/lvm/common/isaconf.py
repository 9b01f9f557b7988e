# Instruction set facts shared by the codec and the executor

RECORD_SIZE = 4         # bytes per binary instruction record
OPCODE_SIZE = 1         # leading tag byte of a record

REGISTER_COUNT = 32     # slots in the executor's register file
REGISTER_BITS = 16      # width of a register slot
REGISTER_MASK = (1 << REGISTER_BITS) - 1
