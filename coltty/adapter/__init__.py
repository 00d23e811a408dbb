"""Terminal adapters that apply a resolved color scheme to the running terminal."""