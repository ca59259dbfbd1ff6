"""Remote procedure and event names of the FreeMASTER JSON-RPC service.

Names are the exact wire strings. Groups under `CONSTS` make up the base
surface every service instance offers, `CONSTS.EXT` holds the procedures only
the full FreeMASTER application answers (available after activation).
"""

from __future__ import annotations


class CONSTS:
    class APP:
        GET_APP_VERSION = "GetAppVersion"

    class COMM:
        ENUM_COMM_PORTS = "EnumCommPorts"
        GET_COMM_PORT_INFO = "GetCommPortInfo"
        START_COMM = "StartComm"
        STOP_COMM = "StopComm"
        IS_COMM_PORT_OPEN = "IsCommPortOpen"
        IS_BOARD_DETECTED = "IsBoardDetected"
        GET_DETECTED_BOARD_INFO = "GetDetectedBoardInfo"

    class CONFIG:
        GET_PARAM_U8 = "GetConfigParamU8"
        GET_PARAM_ULEB = "GetConfigParamULEB"
        GET_PARAM_STRING = "GetConfigParamString"

    class MEM:
        READ_INT_VARIABLE = "ReadIntVariable"
        READ_UINT_VARIABLE = "ReadUIntVariable"
        READ_FLOAT_VARIABLE = "ReadFloatVariable"
        READ_DOUBLE_VARIABLE = "ReadDoubleVariable"
        WRITE_INT_VARIABLE = "WriteIntVariable"
        WRITE_UINT_VARIABLE = "WriteUIntVariable"
        WRITE_FLOAT_VARIABLE = "WriteFloatVariable"
        WRITE_DOUBLE_VARIABLE = "WriteDoubleVariable"
        READ_MEMORY = "ReadMemory"
        READ_INT_ARRAY = "ReadIntArray"
        READ_UINT_ARRAY = "ReadUIntArray"
        READ_FLOAT_ARRAY = "ReadFloatArray"
        READ_DOUBLE_ARRAY = "ReadDoubleArray"
        WRITE_MEMORY = "WriteMemory"
        WRITE_INT_ARRAY = "WriteIntArray"
        WRITE_UINT_ARRAY = "WriteUIntArray"
        WRITE_FLOAT_ARRAY = "WriteFloatArray"
        WRITE_DOUBLE_ARRAY = "WriteDoubleArray"

    class TSA:
        READ_ELF = "ReadELF"
        READ_TSA = "ReadTSA"
        ENUM_SYMBOLS = "EnumSymbols"
        GET_SYMBOL_INFO = "GetSymbolInfo"

    class VAR:
        ENUM_VARIABLES = "EnumVariables"
        GET_VARIABLE_INFO = "GetVariableInfo"
        DEFINE_VARIABLE = "DefineVariable"
        DELETE_VARIABLE = "DeleteVariable"
        DELETE_ALL_SCRIPT_VARIABLES = "DeleteAllScriptVariables"
        READ_VARIABLE = "ReadVariable"
        WRITE_VARIABLE = "WriteVariable"

    class SCOPE:
        SETUP_OSCILLOSCOPE = "SetupOscilloscope"
        GET_OSCILLOSCOPE_DATA = "GetOscilloscopeData"

    class REC:
        GET_RECORDER_LIMITS = "GetRecorderLimits"
        SETUP_RECORDER = "SetupRecorder"
        START_RECORDER = "StartRecorder"
        STOP_RECORDER = "StopRecorder"
        GET_RECORDER_STATUS = "GetRecorderStatus"
        GET_RECORDER_DATA = "GetRecorderData"

    class PIPE:
        OPEN = "PipeOpen"
        CLOSE = "PipeClose"
        FLUSH = "PipeFlush"
        SET_DEFAULT_RX_MODE = "PipeSetDefaultRxMode"
        SET_DEFAULT_STRING_MODE = "PipeSetDefaultStringMode"
        GET_RX_BYTES = "PipeGetRxBytes"
        GET_TX_BYTES = "PipeGetTxBytes"
        GET_TX_FREE = "PipeGetTxFree"
        GET_RX_BUFFER_SIZE = "PipeGetRxBufferSize"
        GET_TX_BUFFER_SIZE = "PipeGetTxBufferSize"
        WRITE_STRING = "PipeWriteString"
        WRITE_INT_ARRAY = "PipeWriteIntArray"
        WRITE_UINT_ARRAY = "PipeWriteUIntArray"
        WRITE_FLOAT_ARRAY = "PipeWriteFloatArray"
        WRITE_DOUBLE_ARRAY = "PipeWriteDoubleArray"
        READ_STRING = "PipeReadString"
        READ_INT_ARRAY = "PipeReadIntArray"
        READ_UINT_ARRAY = "PipeReadUIntArray"
        READ_FLOAT_ARRAY = "PipeReadFloatArray"
        READ_DOUBLE_ARRAY = "PipeReadDoubleArray"

    class FILE:
        OPEN = "LocalFileOpen"
        CLOSE = "LocalFileClose"
        READ_STRING = "LocalFileReadString"
        WRITE_STRING = "LocalFileWriteString"

    class LOG:
        ENABLE = "LogEnable"
        DISABLE = "LogDisable"
        SET_PATTERN = "LogSetPattern"
        SET_VERBOSITY = "LogSetVerbosity"
        SET_SERVICES = "LogSetServices"

    # full FreeMASTER application only
    class EXT:
        START_STOP_COMM = "StartStopComm"
        ENABLE_EVENTS = "EnableEvents"
        SUBSCRIBE_VARIABLE = "SubscribeVariable"
        UNSUBSCRIBE_VARIABLE = "UnSubscribeVariable"
        DEFINE_SYMBOL = "DefineSymbol"
        GET_STRUCT_MEMBER_INFO = "GetStructMemberInfo"
        DELETE_ALL_SCRIPT_SYMBOLS = "DeleteAllScriptSymbols"
        RUN_STIMULATORS = "RunStimulators"
        STOP_STIMULATORS = "StopStimulators"
        EXIT = "Exit"
        ACTIVATE_WINDOW = "ActivateWindow"
        SELECT_ITEM = "SelectItem"
        OPEN_PROJECT = "OpenProject"
        IS_BOARD_WITH_ACTIVE_CONTENT = "IsBoardWithActiveContent"
        ENUM_HREF_LINKS = "EnumHrefLinks"
        ENUM_PROJECT_FILES = "EnumProjectFiles"
        SET_PAGE_RELOAD_ON_PORT_OPEN = "SetPageReloadOnPortOpen"
        GET_PAGE_RELOAD_ON_PORT_OPEN = "GetPageReloadOnPortOpen"
        PIPE_SET_DEFAULT_TX_MODE = "PipeSetDefaultTxMode"
        GET_ADDRESS_INFO = "GetAddressInfo"
        DEFINE_OSCILLOSCOPE = "DefineOscilloscope"
        DEFINE_RECORDER = "DefineRecorder"
        SEND_COMMAND = "SendCommand"
        GET_CURRENT_RECORDER_STATE = "GetCurrentRecorderState"
        GET_CURRENT_RECORDER_DATA = "GetCurrentRecorderData"
        GET_CURRENT_RECORDER_SERIES = "GetCurrentRecorderSeries"


class EVENTS:
    """Server-pushed notifications routed once extensions are activated."""

    BOARD_DETECTED = "OnBoardDetected"
    COMM_PORT_STATE_CHANGED = "OnCommPortStateChanged"
    VARIABLE_CHANGED = "OnVariableChanged"
    RECORDER_DONE = "OnRecorderDone"


def _names(*groups: type) -> frozenset[str]:
    return frozenset(
        val
        for grp in groups
        for key, val in vars(grp).items()
        if not key.startswith("_") and isinstance(val, str)
    )


BASE_COMMANDS: frozenset[str] = _names(
    CONSTS.APP,
    CONSTS.COMM,
    CONSTS.CONFIG,
    CONSTS.MEM,
    CONSTS.TSA,
    CONSTS.VAR,
    CONSTS.SCOPE,
    CONSTS.REC,
    CONSTS.PIPE,
    CONSTS.FILE,
    CONSTS.LOG,
)
EXTENDED_COMMANDS: frozenset[str] = _names(CONSTS.EXT)

# registration order with the dispatch table
EXTENDED_EVENTS: tuple[str, ...] = (
    EVENTS.BOARD_DETECTED,
    EVENTS.COMM_PORT_STATE_CHANGED,
    EVENTS.VARIABLE_CHANGED,
    EVENTS.RECORDER_DONE,
)
