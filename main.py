from luxury_shopper.agent import (
    initialize_agent,
    process_message,
    format_console_message
)
from luxury_shopper.constants import WELCOME_MESSAGE
from luxury_shopper.session_store import new_session_id

if __name__ == "__main__":
    session_store, engine = initialize_agent()
    session_id = new_session_id()
    session_store.create(session_id)

    print(format_console_message(WELCOME_MESSAGE))

    while True:
        try:
            user_input = input("\nYou (or 'quit' to exit): ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting.")
            break

        if not user_input:
            continue
        if user_input.lower() in {"quit", "exit"}:
            break

        result = process_message(session_store, engine, session_id, user_input)
        print(format_console_message(result.message))

    engine.gateway.close()
