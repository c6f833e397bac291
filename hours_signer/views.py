from .config import config_path
from .session import EMPLOYEE, MANAGER, SIGNATURE, Screen, Session

TITLE = "📝 Hours Signer"


def _help(text: str) -> str:
    return f"\n{text}"


def view_setup_welcome(session: Session) -> str:
    s = f"{TITLE} - Setup\n\n"
    s += "Welcome! No configuration file found.\n"
    s += "Let's set up your signature settings.\n\n"
    path = config_path()
    if path is None:
        s += "Config location unknown: could not determine your home directory\n\n"
    else:
        s += f"Config will be saved to: {path}\n\n"
    s += _help("Press Enter to continue • q to quit")
    return s


def view_setup_signature(session: Session) -> str:
    s = f"{TITLE} - Setup (1/3)\n\n"
    s += "Enter the path to your signature image (PNG/JPG).\n"
    s += "Example: ~/.config/hours-signer/signature.png\n\n"
    s += "Signature path:\n"
    s += session.inputs[SIGNATURE].view() + "\n\n"
    s += _help("Press Enter to continue")
    return s


def view_setup_employee(session: Session) -> str:
    s = f"{TITLE} - Setup (2/3)\n\n"
    s += "Enter the employee name.\n\n"
    s += "Employee name:\n"
    s += session.inputs[EMPLOYEE].view() + "\n\n"
    s += _help("Press Enter to continue")
    return s


def view_setup_manager(session: Session) -> str:
    s = f"{TITLE} - Setup (3/3)\n\n"
    s += "Enter the manager name.\n\n"
    s += "Manager name:\n"
    s += session.inputs[MANAGER].view() + "\n\n"
    s += _help("Press Enter to continue")
    return s


def view_setup_confirm(session: Session) -> str:
    draft = session.draft
    s = f"{TITLE} - Confirm Setup\n\n"
    s += "Please confirm your settings:\n\n"
    s += f"  Signature:  {draft.signature_path}\n"
    s += f"  Employee:   {draft.employee_name}\n"
    s += f"  Manager:    {draft.manager_name}\n\n"
    s += _help("Press y/Enter to save • n to edit again")
    return s


def view_main(session: Session) -> str:
    cfg = session.config
    s = f"{TITLE}\n\n"
    s += "Current configuration:\n"
    s += f"  Employee:   {cfg.employee_name}\n"
    s += f"  Manager:    {cfg.manager_name}\n"
    s += f"  Signature:  {cfg.signature_path or '(not configured)'}\n\n"
    if not cfg.signature_path:
        s += "⚠ Signature not configured - press c to configure\n\n"
    s += "What would you like to do?\n\n"
    s += "  [s] Sign a PDF\n"
    s += "  [c] Configure settings\n\n"
    s += _help("Press s to sign • c to configure • q to quit")
    return s


def view_file_picker(session: Session) -> str:
    s = "📂 Select PDF File\n\n"
    s += session.browser.view() + "\n\n"
    s += _help("Enter to select • Esc to cancel")
    return s


def view_signing(session: Session) -> str:
    s = "⏳ Signing PDF...\n\n"
    s += f"Processing: {session.selected_file}\n"
    return s


def view_result(session: Session) -> str:
    if session.result_error is not None:
        s = "❌ Error\n\n"
        s += f"{session.result_error}\n\n"
    else:
        s = "✓ PDF Signed Successfully!\n\n"
        s += f"Output: {session.result_output}\n\n"
    s += _help("Press Enter to continue")
    return s


_VIEWS = {
    Screen.SETUP_WELCOME: view_setup_welcome,
    Screen.SETUP_SIGNATURE: view_setup_signature,
    Screen.SETUP_EMPLOYEE: view_setup_employee,
    Screen.SETUP_MANAGER: view_setup_manager,
    Screen.SETUP_CONFIRM: view_setup_confirm,
    Screen.MAIN: view_main,
    Screen.FILE_PICKER: view_file_picker,
    Screen.SIGNING: view_signing,
    Screen.RESULT: view_result,
}


def render(session: Session) -> str:
    return _VIEWS[session.screen](session)
