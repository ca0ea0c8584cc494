# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
オペコードパターンと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import graphics
from . import load
from .base import InstructionKind as K

# @intent:map 上位ニブルだけで命令が確定するファミリー。
FAMILY_MAP = {
    0x1: K.JP_ADDR,
    0x2: K.CALL_ADDR,
    0x3: K.SE_VX_BYTE,
    0x4: K.SNE_VX_BYTE,
    0x6: K.LD_VX_BYTE,
    0x7: K.ADD_VX_BYTE,
    0xA: K.LD_I_ADDR,
    0xC: K.RND_VX_BYTE,
    0xD: K.DRW_VX_VY_N,
}

# @intent:map 0ファミリーはオペコード全体で照合します（0nnn SYS は未実装扱い）。
SYSTEM_MAP = {
    0x00E0: K.CLS,
    0x00EE: K.RET,
}

# @intent:map 5/9ファミリーは最下位ニブルが0の場合のみ有効です。
REGISTER_COMPARE_MAP = {
    0x5: K.SE_VX_VY,
    0x9: K.SNE_VX_VY,
}

# @intent:map 8ファミリー: 最下位ニブルで二次ディスパッチします。
ALU_MAP = {
    0x0: K.LD_VX_VY,
    0x1: K.OR_VX_VY,
    0x2: K.AND_VX_VY,
    0x3: K.XOR_VX_VY,
    0x4: K.ADD_VX_VY,
    0x5: K.SUB_VX_VY,
    0x6: K.SHR_VX,
    0x7: K.SUBN_VX_VY,
    0xE: K.SHL_VX,
}

# @intent:map E/Fファミリー: 下位8bitで二次ディスパッチします。
KEY_MAP = {
    0x9E: K.SKP_VX,
    0xA1: K.SKNP_VX,
}

MISC_MAP = {
    0x07: K.LD_VX_DT,
    0x0A: K.LD_VX_K,
    0x15: K.LD_DT_VX,
    0x18: K.LD_ST_VX,
    0x1E: K.ADD_I_VX,
    0x29: K.LD_F_VX,
    0x33: K.LD_B_VX,
    0x55: K.LD_MEM_VX,
    0x65: K.LD_VX_MEM,
}

# @intent:map 命令種別からニーモニックとオペランド書式へのマッピング。
#             書式はOpcodeFieldsのフィールド名で展開されます。
FORMAT_MAP = {
    K.CLS: ("CLS", []),
    K.RET: ("RET", []),
    K.JP_ADDR: ("JP", ["${nnn:03X}"]),
    K.CALL_ADDR: ("CALL", ["${nnn:03X}"]),
    K.SE_VX_BYTE: ("SE", ["V{x:X}", "#${nn:02X}"]),
    K.SNE_VX_BYTE: ("SNE", ["V{x:X}", "#${nn:02X}"]),
    K.SE_VX_VY: ("SE", ["V{x:X}", "V{y:X}"]),
    K.LD_VX_BYTE: ("LD", ["V{x:X}", "#${nn:02X}"]),
    K.ADD_VX_BYTE: ("ADD", ["V{x:X}", "#${nn:02X}"]),
    K.LD_VX_VY: ("LD", ["V{x:X}", "V{y:X}"]),
    K.OR_VX_VY: ("OR", ["V{x:X}", "V{y:X}"]),
    K.AND_VX_VY: ("AND", ["V{x:X}", "V{y:X}"]),
    K.XOR_VX_VY: ("XOR", ["V{x:X}", "V{y:X}"]),
    K.ADD_VX_VY: ("ADD", ["V{x:X}", "V{y:X}"]),
    K.SUB_VX_VY: ("SUB", ["V{x:X}", "V{y:X}"]),
    K.SHR_VX: ("SHR", ["V{x:X}"]),
    K.SUBN_VX_VY: ("SUBN", ["V{x:X}", "V{y:X}"]),
    K.SHL_VX: ("SHL", ["V{x:X}"]),
    K.SNE_VX_VY: ("SNE", ["V{x:X}", "V{y:X}"]),
    K.LD_I_ADDR: ("LD", ["I", "${nnn:03X}"]),
    K.RND_VX_BYTE: ("RND", ["V{x:X}", "#${nn:02X}"]),
    K.DRW_VX_VY_N: ("DRW", ["V{x:X}", "V{y:X}", "{n}"]),
    K.SKP_VX: ("SKP", ["V{x:X}"]),
    K.SKNP_VX: ("SKNP", ["V{x:X}"]),
    K.LD_VX_DT: ("LD", ["V{x:X}", "DT"]),
    K.LD_VX_K: ("LD", ["V{x:X}", "K"]),
    K.LD_DT_VX: ("LD", ["DT", "V{x:X}"]),
    K.LD_ST_VX: ("LD", ["ST", "V{x:X}"]),
    K.ADD_I_VX: ("ADD", ["I", "V{x:X}"]),
    K.LD_F_VX: ("LD", ["F", "V{x:X}"]),
    K.LD_B_VX: ("LD", ["B", "V{x:X}"]),
    K.LD_MEM_VX: ("LD", ["[I]", "V{x:X}"]),
    K.LD_VX_MEM: ("LD", ["V{x:X}", "[I]"]),
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    K.JP_ADDR: control.execute_jp,
    K.CALL_ADDR: control.execute_call,
    K.RET: control.execute_ret,
    K.SE_VX_BYTE: control.execute_se_byte,
    K.SNE_VX_BYTE: control.execute_sne_byte,
    K.SE_VX_VY: control.execute_se_reg,
    K.SNE_VX_VY: control.execute_sne_reg,
    K.SKP_VX: control.execute_skp,
    K.SKNP_VX: control.execute_sknp,
    K.LD_VX_K: control.execute_wait_key,

    # ALU
    K.ADD_VX_BYTE: alu.execute_add_byte,
    K.RND_VX_BYTE: alu.execute_rnd,
    K.OR_VX_VY: alu.execute_or,
    K.AND_VX_VY: alu.execute_and,
    K.XOR_VX_VY: alu.execute_xor,
    K.ADD_VX_VY: alu.execute_add_reg,
    K.SUB_VX_VY: alu.execute_sub,
    K.SHR_VX: alu.execute_shr,
    K.SUBN_VX_VY: alu.execute_subn,
    K.SHL_VX: alu.execute_shl,
    K.ADD_I_VX: alu.execute_add_index,

    # Load/Store
    K.LD_VX_BYTE: load.execute_ld_byte,
    K.LD_VX_VY: load.execute_ld_reg,
    K.LD_I_ADDR: load.execute_ld_index,
    K.LD_VX_DT: load.execute_ld_vx_dt,
    K.LD_DT_VX: load.execute_ld_dt_vx,
    K.LD_ST_VX: load.execute_ld_st_vx,
    K.LD_F_VX: load.execute_ld_font,
    K.LD_B_VX: load.execute_ld_bcd,
    K.LD_MEM_VX: load.execute_store_registers,
    K.LD_VX_MEM: load.execute_load_registers,

    # Display
    K.CLS: graphics.execute_cls,
    K.DRW_VX_VY_N: graphics.execute_drw,
}
