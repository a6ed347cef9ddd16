from calendly_relay.main import main

main()
