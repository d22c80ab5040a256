from termedit.adapters.textual.app import main

main()
